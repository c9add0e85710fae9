"""Next.js manifest parsing and route normalisation.

Next.js emits machine-generated, structurally predictable build artifacts.
The JSON manifests are read with the streaming scanner, and App Router
filesystem conventions are decoded back to the user-facing URL.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from hifi.jsonscan import Event, EventKind, Parser, object_keys

_INTERCEPTING_MARKERS = ("(...)", "(..)", "(.)")


@dataclass(slots=True)
class NextConfig:
    """Runtime configuration a Next.js page exposes in ``__NEXT_DATA__``."""

    build_id: str | None = None
    asset_prefix: str | None = None
    base_path: str | None = None
    locales: list[str] = field(default_factory=list)
    default_locale: str | None = None
    locale: str | None = None
    page: str | None = None

    def is_empty(self) -> bool:
        """Whether no field was set."""
        return (
            self.build_id is None
            and self.asset_prefix is None
            and self.base_path is None
            and not self.locales
            and self.default_locale is None
            and self.locale is None
            and self.page is None
        )


def strip_locale(path: str, locales: Sequence[str]) -> str:
    """Drop a leading locale segment when it is one of ``locales``."""
    if not locales:
        return path
    stripped = path.removeprefix("/")
    head, _, rest = stripped.partition("/")
    if head in locales:
        return f"/{rest}" if rest else "/"
    return path


def _is_route_group(segment: str) -> bool:
    return (
        segment.startswith("(")
        and segment.endswith(")")
        and not segment.startswith(_INTERCEPTING_MARKERS)
    )


def _strip_intercepting_marker(segment: str) -> str:
    for marker in _INTERCEPTING_MARKERS:
        if segment.startswith(marker):
            return segment[len(marker):]
    return segment


def normalize_app_route(raw: str) -> str:
    """Decode App Router conventions into the user-facing URL.

    Route groups ``(group)`` and parallel slots ``@slot`` are removed;
    intercepting markers are stripped from the segment they prefix.
    """
    if "(" not in raw and "@" not in raw:
        return raw
    out = ""
    first = True
    for segment in raw.split("/"):
        if not segment:
            if first:
                out += "/"
                first = False
            continue
        first = False
        if _is_route_group(segment) or segment.startswith("@"):
            continue
        segment = _strip_intercepting_marker(segment)
        if not segment:
            continue
        if not out.endswith("/"):
            out += "/"
        out += segment
    return out or "/"


def route_from_app_key(key: str) -> str:
    """Turn an app manifest key such as ``/(group)/about/page`` into a route."""
    stripped = key
    for suffix in ("/page", "/route", "/layout"):
        if key.endswith(suffix):
            stripped = key[: -len(suffix)]
            break
    return normalize_app_route(stripped) or "/"


def parse_app_build_manifest(data: bytes) -> list[str]:
    """Route patterns advertised by ``app-build-manifest.json``."""
    keys = object_keys(data, "pages")
    if keys is not None:
        return [route_from_app_key(key) for key in keys]
    keys = object_keys(data, None)
    if keys is None:
        return []
    return [
        route_from_app_key(key)
        for key in keys
        if key.startswith("/") or "/page" in key
    ]


def _route_from_app_chunk(key: str) -> str | None:
    path = key.removeprefix("app")
    for suffix in ("/page", "/route"):
        if path.endswith(suffix):
            path = path[: -len(suffix)]
            break
    route = normalize_app_route(path)
    return route or None


def _is(event: Event | None, kind: EventKind) -> bool:
    return event is not None and event.kind is kind


def _worker_routes(parser: Parser) -> Iterator[str | None]:
    """Yield routes for worker keys; yield ``None`` last when input is malformed."""
    while True:
        event = parser.next_event()
        if _is(event, EventKind.END_OBJECT):
            return
        if not _is(event, EventKind.KEY):
            yield None
            return
        route = _route_from_app_chunk(event.text)
        if route is not None:
            yield route
        if not parser.skip_value():
            yield None
            return


def _server_action_routes(parser: Parser) -> Iterator[str]:
    if not _is(parser.next_event(), EventKind.BEGIN_OBJECT):
        return
    while True:
        event = parser.next_event()
        if not _is(event, EventKind.KEY):
            return
        if event.text == "serverActions":
            break
        if not parser.skip_value():
            return
    if not _is(parser.next_event(), EventKind.BEGIN_OBJECT):
        return
    while True:
        if not _is(parser.next_event(), EventKind.KEY):
            return
        if not _is(parser.next_event(), EventKind.BEGIN_OBJECT):
            return
        while True:
            event = parser.next_event()
            if _is(event, EventKind.END_OBJECT):
                break
            if not _is(event, EventKind.KEY):
                return
            if event.text == "workers":
                if not _is(parser.next_event(), EventKind.BEGIN_OBJECT):
                    return
                for route in _worker_routes(parser):
                    if route is None:
                        return
                    yield route
            elif not parser.skip_value():
                return


def parse_client_reference_manifest(data: bytes) -> list[str]:
    """Routes backing the server actions in ``_clientReferenceManifest.json``.

    Routes found before any malformed input are kept.
    """
    return list(_server_action_routes(Parser(data)))