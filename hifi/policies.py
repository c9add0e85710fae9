"""Scanner policy tables loaded from a TOML policy document."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

FNV_OFFSET = 0xCBF29CE484222325
FNV_PRIME = 0x100000001B3
_MASK = 0xFFFF_FFFF_FFFF_FFFF

_CLIENT_MODES = {"first_arg": 0, "object": 1, "generic_method": 2}
_DOCUMENT_SECTIONS = ("api_call", "api_candidate", "route_call", "route_value", "route_start")
_FRAMEWORKS = ("next", "nuxt", "sveltekit", "astro", "remix")


@dataclass(frozen=True, slots=True)
class FixedClientPattern:
    """An anchor identifying an HTTP client call, with its method and argument mode."""

    anchor: bytes
    method: str | None
    mode: int


@dataclass(frozen=True, slots=True)
class Policies:
    """All literal tables the scanner needs."""

    bad_exts: tuple[str, ...]
    route_bad_exts: tuple[str, ...]
    asset_literals: tuple[str, ...]
    data_markers: tuple[str, ...]
    context_markers: tuple[str, ...]
    is_context_markers: Mapping[str, tuple[str, ...]]
    api_path_prefixes: tuple[str, ...]
    skip_fragments: Mapping[str, tuple[str, ...]]
    nuxt_context_prefixes: tuple[str, ...]
    sveltekit_context_prefixes: tuple[str, ...]
    sveltekit_immutable_children: tuple[str, ...]
    document_patterns: tuple[tuple[str, int], ...]
    fixed_client_patterns: tuple[FixedClientPattern, ...]


def _lookup(table: Mapping[str, Any], path: Sequence[str]) -> Any:
    value: Any = table
    for key in path:
        if not isinstance(value, Mapping) or key not in value:
            return None
        value = value[key]
    return value


def str_list(table: Mapping[str, Any], path: Sequence[str]) -> list[str]:
    """Strings of the array found at ``path``; empty when absent or not an array."""
    value = _lookup(table, path)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def client_mode(name: str) -> int:
    """Numeric code of a client argument mode; unknown names map to 0."""
    return _CLIENT_MODES.get(name, 0)


def is_context_markers(
    table: Mapping[str, Any],
    framework: str,
    context_markers: Sequence[str],
    data_markers: Sequence[str],
) -> list[str]:
    """Markers that identify ``framework``; each must come from the shared lists.

    Raises :class:`ValueError` when a referenced literal is missing from them.
    """
    section = _lookup(table, [framework, "is_context"])
    if not isinstance(section, Mapping):
        return []
    items: list[str] = []
    for literal in str_list(section, ["context"]):
        if literal not in context_markers:
            raise ValueError(
                f"{framework}.is_context.context literal {literal!r} "
                "missing from discover.context_markers"
            )
        items.append(literal)
    for literal in str_list(section, ["data"]):
        if literal not in data_markers:
            raise ValueError(
                f"{framework}.is_context.data literal {literal!r} "
                "missing from discover.data_markers"
            )
        items.append(literal)
    items.extend(str_list(section, ["extra"]))
    return items


def _ascii_lower(text: str) -> str:
    return text.encode().lower().decode()


def client_method_patterns(table: Mapping[str, Any]) -> list[FixedClientPattern]:
    """Expand each method template for every configured HTTP verb."""
    methods = str_list(table, ["scan", "clients", "methods", "verbs"])
    templates = str_list(table, ["scan", "clients", "method_templates", "patterns"])
    modes = str_list(table, ["scan", "clients", "method_templates", "modes"])
    patterns = []
    for method in methods:
        lower = _ascii_lower(method)
        for idx, template in enumerate(templates):
            anchor = template.replace("{method}", lower).replace("${method}", lower)
            mode = client_mode(modes[idx]) if idx < len(modes) else 0
            patterns.append(FixedClientPattern(anchor.encode(), method, mode))
    return patterns


def fixed_client_patterns(table: Mapping[str, Any]) -> list[FixedClientPattern]:
    """The fixed client rows followed by the expanded method patterns."""
    rows = _lookup(table, ["scan", "clients", "fixed"])
    patterns = []
    for row in rows if isinstance(rows, list) else []:
        if not isinstance(row, Mapping):
            continue
        anchor = row.get("anchor")
        mode = row.get("mode")
        method = row.get("method")
        patterns.append(
            FixedClientPattern(
                anchor=(anchor if isinstance(anchor, str) else "").encode(),
                method=method if isinstance(method, str) else None,
                mode=client_mode(mode) if isinstance(mode, str) else 0,
            )
        )
    patterns.extend(client_method_patterns(table))
    return patterns


def load_policies(table: Mapping[str, Any]) -> Policies:
    """Build :class:`Policies` from an already parsed policy table."""
    context_markers = str_list(table, ["discover", "context_markers", "literals"])
    data_markers = str_list(table, ["discover", "data_markers", "literals"])
    markers = {
        "next": tuple(is_context_markers(table, "next", [], [])),
        **{
            name: tuple(is_context_markers(table, name, context_markers, data_markers))
            for name in _FRAMEWORKS[1:]
        },
    }
    document = tuple(
        (literal, kind)
        for kind, section in enumerate(_DOCUMENT_SECTIONS)
        for literal in str_list(table, ["scan", section, "literals"])
    )
    return Policies(
        bad_exts=tuple(str_list(table, ["scan", "bad_ext", "exts"])),
        route_bad_exts=tuple(str_list(table, ["scan", "route_bad_ext", "exts"])),
        asset_literals=tuple(str_list(table, ["discover", "assets", "literals"])),
        data_markers=tuple(data_markers),
        context_markers=tuple(context_markers),
        is_context_markers=markers,
        api_path_prefixes=tuple(str_list(table, ["scan", "api_paths", "prefixes"])),
        skip_fragments={
            name: tuple(str_list(table, [name, "skip", "fragments"])) for name in _FRAMEWORKS
        },
        nuxt_context_prefixes=tuple(str_list(table, ["nuxt", "context_prefixes", "prefixes"])),
        sveltekit_context_prefixes=tuple(
            str_list(table, ["sveltekit", "context_prefixes", "prefixes"])
        ),
        sveltekit_immutable_children=tuple(
            str_list(table, ["sveltekit", "immutable_children", "paths"])
        ),
        document_patterns=document,
        fixed_client_patterns=tuple(fixed_client_patterns(table)),
    )


def parse_policies(text: str) -> Policies:
    """Parse a TOML policy document."""
    return load_policies(tomllib.loads(text))


def _hash_str(h: int, value: str) -> int:
    for byte in value.encode():
        h = ((h ^ byte) * FNV_PRIME) & _MASK
    return ((h ^ ord("\n")) * FNV_PRIME) & _MASK


def build_hash(version: str, raw: str, rev: str | None = None) -> str:
    """FNV-1a fingerprint of the version, optional revision and policy text."""
    h = _hash_str(FNV_OFFSET, version)
    if rev is not None:
        h = _hash_str(h, rev)
    h = _hash_str(h, raw)
    return f"{h:016x}"