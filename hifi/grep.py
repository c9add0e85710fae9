"""Search raw bytes for a literal pattern and report grep-style hits."""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Sequence
from dataclasses import dataclass, field

DEFAULT_CONTEXT = 2
DEFAULT_MAX_HITS = 50
DEFAULT_MAX_BYTES_PER_HIT = 200
USAGE = "usage: hifi grep <url> <pattern> [-C N]"
ELLIPSIS = "\u2026"

_NUMBER = re.compile(r"\+?[0-9]+")


class GrepUsageError(ValueError):
    """Raised when grep arguments are missing or malformed."""


@dataclass(slots=True)
class GrepOptions:
    """How many context lines, hits and snippet bytes to report."""

    context: int = DEFAULT_CONTEXT
    max_hits: int | None = DEFAULT_MAX_HITS
    max_bytes_per_hit: int = DEFAULT_MAX_BYTES_PER_HIT


@dataclass(frozen=True, slots=True)
class Hit:
    """One match: where it was found and the text around it."""

    url: str
    line: int
    column: int
    snippet: str


@dataclass(slots=True)
class GrepResult:
    """Hits plus counters describing what was left out."""

    hits: list[Hit] = field(default_factory=list)
    files_failed: int = 0
    hits_not_printed: int = 0
    files_with_hits_not_printed: int = 0
    bytes_not_displayed_estimate: int = 0
    snippets_shortened: int = 0


def _parse_number(flag: str, value: str) -> int:
    if not _NUMBER.fullmatch(value):
        raise GrepUsageError(f"'{flag} {value}' is not a number")
    return int(value)


def parse_grep_args(args: Sequence[str]) -> tuple[str, str, GrepOptions]:
    """Parse grep arguments into ``(url, pattern, options)``."""
    url: str | None = None
    pattern: str | None = None
    options = GrepOptions()
    items = iter(args)
    for arg in items:
        if arg in ("-C", "--context"):
            value = next(items, None)
            if value is None:
                raise GrepUsageError("'-C' needs a number")
            options.context = _parse_number("-C", value)
        elif arg == "--max-hits":
            value = next(items, None)
            if value is None:
                raise GrepUsageError("'--max-hits' needs a number")
            options.max_hits = _parse_number("--max-hits", value)
        elif arg == "--max-bytes-per-hit":
            value = next(items, None)
            if value is None:
                raise GrepUsageError("'--max-bytes-per-hit' needs a number")
            options.max_bytes_per_hit = _parse_number("--max-bytes-per-hit", value)
        elif arg in ("-a", "--all"):
            options.max_hits = None
        elif arg.startswith("-"):
            raise GrepUsageError(f"unknown flag '{arg}' (try --help)")
        elif url is None:
            url = arg
        elif pattern is None:
            pattern = arg
        else:
            raise GrepUsageError(f"unexpected argument '{arg}'")
    if url is None or pattern is None:
        raise GrepUsageError(USAGE)
    if not pattern:
        raise GrepUsageError("pattern must not be empty")
    return url, pattern, options


def _find_all(data: bytes, pattern: bytes):
    pos = data.find(pattern)
    while pos != -1:
        yield pos
        pos = data.find(pattern, pos + len(pattern))


def grep_bytes(url: str, data: bytes, pattern: bytes, options: GrepOptions) -> GrepResult:
    """Find every non-overlapping occurrence of ``pattern`` in ``data``."""
    if not pattern:
        raise ValueError("pattern must not be empty")
    data = bytes(data)
    pattern = bytes(pattern)
    result = GrepResult()
    max_hits = options.max_hits
    file_omitted = False

    line_starts = [0]
    newline = data.find(b"\n")
    while newline != -1:
        line_starts.append(newline + 1)
        newline = data.find(b"\n", newline + 1)

    for abs_pos in _find_all(data, pattern):
        line_idx = max(bisect_right(line_starts, abs_pos) - 1, 0)
        lo_line = max(line_idx - options.context, 0)
        hi_line = min(line_idx + options.context + 1, len(line_starts))
        lo = line_starts[lo_line]
        hi = line_starts[hi_line] if hi_line < len(line_starts) else len(data)
        if max_hits is not None and len(result.hits) >= max_hits:
            result.hits_not_printed += 1
            result.bytes_not_displayed_estimate += max(hi - lo, 0)
            file_omitted = True
            continue
        snip_lo, snip_hi = snippet_window(
            data, lo, hi, abs_pos, len(pattern), options.max_bytes_per_hit
        )
        if snip_lo > lo or snip_hi < hi:
            result.snippets_shortened += 1
            result.bytes_not_displayed_estimate += (hi - lo) - (snip_hi - snip_lo)
        raw = (
            data[snip_lo:snip_hi]
            .decode("utf-8", errors="replace")
            .rstrip("\n")
            .replace("\n", " ")
        )
        prefix = ELLIPSIS if snip_lo > lo else ""
        suffix = ELLIPSIS if snip_hi < hi else ""
        result.hits.append(
            Hit(
                url=url,
                line=line_idx + 1,
                column=max(abs_pos - line_starts[line_idx], 0) + 1,
                snippet=f"{prefix}{raw}{suffix}",
            )
        )
    if file_omitted:
        result.files_with_hits_not_printed = 1
    return result


def merge_chunk(result: GrepResult, chunk: GrepResult, max_hits: int | None) -> None:
    """Fold ``chunk`` into ``result``, enforcing a global hit cap."""
    result.hits_not_printed += chunk.hits_not_printed
    result.files_with_hits_not_printed += chunk.files_with_hits_not_printed
    result.bytes_not_displayed_estimate += chunk.bytes_not_displayed_estimate
    result.snippets_shortened += chunk.snippets_shortened
    result.files_failed += chunk.files_failed

    if max_hits is None:
        result.hits.extend(chunk.hits)
        return
    remaining = max(max_hits - len(result.hits), 0)
    if len(chunk.hits) <= remaining:
        result.hits.extend(chunk.hits)
        return

    kept, omitted = chunk.hits[:remaining], chunk.hits[remaining:]
    result.hits_not_printed += len(omitted)
    result.bytes_not_displayed_estimate += sum(len(hit.snippet.encode()) for hit in omitted)
    if omitted and chunk.files_with_hits_not_printed == 0:
        result.files_with_hits_not_printed += 1
    result.hits.extend(kept)


def _is_continuation(byte: int) -> bool:
    return byte & 0b1100_0000 == 0b1000_0000


def _snap_down(data: bytes, idx: int, floor: int) -> int:
    while idx > floor and _is_continuation(data[idx]):
        idx -= 1
    return idx


def _snap_up(data: bytes, idx: int, ceil: int) -> int:
    while idx < ceil and _is_continuation(data[idx]):
        idx += 1
    return idx


def snippet_window(
    data: bytes, lo: int, hi: int, abs_pos: int, pat_len: int, max_bytes: int
) -> tuple[int, int]:
    """Pick a range inside ``[lo, hi]`` of at most ``max_bytes`` centred on the match.

    Both ends are snapped to UTF-8 character boundaries.
    """
    if hi - lo <= max_bytes:
        return lo, hi
    match_end = abs_pos + pat_len
    if pat_len >= max_bytes:
        return abs_pos, _snap_up(data, abs_pos + max_bytes, hi)
    slack = max_bytes - pat_len
    before = slack // 2
    after = slack - before
    start = max(abs_pos - before, 0, lo)
    end = min(match_end + after, hi)
    if end - start < max_bytes:
        if start == lo:
            end = min(start + max_bytes, hi)
        elif end == hi:
            start = max(end - max_bytes, 0, lo)
    return _snap_down(data, start, lo), _snap_up(data, end, hi)


def format_bytes(count: int) -> str:
    """Render a byte count as ``B``, ``KB`` or ``MB``."""
    if count >= 1024 * 1024:
        return f"{count / (1024 * 1024):.1f}MB"
    if count >= 1024:
        return f"{count / 1024:.1f}KB"
    return f"{count}B"


def format_hit(hit: Hit) -> str:
    """Render a hit as ``url:line:column<TAB>snippet``."""
    return f"{hit.url}:{hit.line}:{hit.column}\t{hit.snippet}"