"""Shared asset resolution, skip and manifest matching helpers.

URLs are plain absolute URL strings.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from urllib.parse import urljoin, urlsplit


def _join(base: str, reference: str) -> str | None:
    try:
        return urljoin(base, reference)
    except ValueError:
        return None


def ends_with_ignore_case(text: str, suffix: str) -> bool:
    """ASCII case-insensitive ``str.endswith``."""
    raw, tail = text.encode(), suffix.encode()
    if len(tail) > len(raw):
        return False
    return raw[len(raw) - len(tail):].lower() == tail.lower()


def path_contains_any(path: str, fragments: Iterable[str]) -> bool:
    """Whether ``path`` contains any of ``fragments``."""
    return any(fragment in path for fragment in fragments)


def resolve_prefixed(base: str, raw: str, prefix: str) -> str | None:
    """Resolve ``raw`` as a root-relative path when it starts with ``prefix``."""
    if not raw.startswith(prefix):
        return None
    return _join(base, f"/{raw}")


def resolve_under(
    base: str, raw: str, context: bool, prefixes: Sequence[str], mount: str
) -> str | None:
    """Resolve ``raw`` beneath ``mount`` when in context and it has a known prefix."""
    if not context or not any(raw.startswith(prefix) for prefix in prefixes):
        return None
    return _join(base, f"{mount}{raw}")


def resolve_prefixed_or_under(
    base: str,
    raw: str,
    context: bool,
    prefix: str,
    under_prefixes: Sequence[str],
    mount: str,
) -> str | None:
    """Try :func:`resolve_prefixed`, then :func:`resolve_under`."""
    resolved = resolve_prefixed(base, raw, prefix)
    if resolved is not None:
        return resolved
    return resolve_under(base, raw, context, under_prefixes, mount)


def resolve_remix(base: str, raw: str, context: bool) -> str | None:
    """Resolve Remix build assets and, in context, route chunks."""
    resolved = resolve_prefixed(base, raw, "build/")
    if resolved is not None or not context:
        return resolved
    resolved = resolve_under(base, raw, True, ["routes/"], "/build/")
    if resolved is not None:
        return resolved
    return resolve_prefixed(base, raw, "assets/routes/")


def should_skip_fragments(url: str, anchor: str, fragments: Iterable[str]) -> bool:
    """Whether the URL path lies under ``anchor`` and contains a skip fragment."""
    path = urlsplit(url).path
    return anchor in path and path_contains_any(path, fragments)


def manifest_matches(
    path: str,
    ends_with: Iterable[str],
    contains: Iterable[str],
    gated: Iterable[tuple[str, str]],
) -> bool:
    """Match a path by suffix, by substring, or by substring plus suffix."""
    return (
        any(ends_with_ignore_case(path, suffix) for suffix in ends_with)
        or any(needle in path for needle in contains)
        or any(
            needle in path and ends_with_ignore_case(path, suffix)
            for needle, suffix in gated
        )
    )