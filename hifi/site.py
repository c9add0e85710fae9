"""Detected front-end frameworks for a scanned site."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from hifi.nextparser import NextConfig


class FrameworkId(enum.Enum):
    """Frameworks the scanner recognises, in detection priority order."""

    NEXT = "Next.js"
    NUXT = "Nuxt"
    SVELTEKIT = "SvelteKit"
    ASTRO = "Astro"
    REMIX = "Remix"
    ANGULAR = "Angular"

    @property
    def index(self) -> int:
        """Position of this framework in priority order."""
        return list(FrameworkId).index(self)

    @property
    def display_name(self) -> str:
        """Human-readable framework name."""
        return self.value


@dataclass(slots=True)
class DetectedSite:
    """Which frameworks a document belongs to, and the most specific one."""

    active: frozenset[FrameworkId] = field(default_factory=frozenset)
    primary: FrameworkId = FrameworkId.NEXT
    next: NextConfig | None = None
    sveltekit_immutable_root: str | None = None

    def has(self, framework: FrameworkId) -> bool:
        """Whether ``framework`` was detected."""
        return framework in self.active

    def label(self) -> str | None:
        """Display label of the primary framework, or ``None`` if none was detected."""
        if not self.active:
            return None
        if self.primary is FrameworkId.NEXT:
            build = self.next.build_id if self.next is not None else None
            if build:
                return f"Next.js (build {build})"
            return "Next.js"
        return self.primary.display_name