"""Text and JSON formatting helpers for scan output."""

from __future__ import annotations

from collections.abc import Iterable

_METHOD_ABBREVIATIONS = {"DELETE": "DEL", "PATCH": "PAT", "OPTIONS": "OPT"}
_JSON_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\x08": "\\b",
    "\x0c": "\\f",
}


def first_segment(path: str) -> str:
    """Return the first path segment with a leading slash, e.g. ``/api``."""
    rest = path.removeprefix("/")
    head, _, _ = rest.partition("/")
    return f"/{head}"


def abbreviate_method(method: str) -> str:
    """Shorten long HTTP method names to three letters."""
    return _METHOD_ABBREVIATIONS.get(method, method)


def _csv_items(csv: str) -> list[str]:
    return [item for item in csv.split(",") if item]


def short_methods(csv: str) -> str:
    """Turn a comma-separated method list into abbreviated, space-separated text."""
    return " ".join(abbreviate_method(method) for method in _csv_items(csv))


def pretty_flags(csv: str) -> str:
    """Turn a comma-separated flag list into space-separated text."""
    return " ".join(_csv_items(csv))


def _escape_char(ch: str) -> str:
    escaped = _JSON_ESCAPES.get(ch)
    if escaped is not None:
        return escaped
    if ch <= "\x1f":
        return f"\\u{ord(ch):04x}"
    return ch


def json_string(value: str) -> str:
    """Encode ``value`` as a JSON string literal."""
    return '"' + "".join(_escape_char(ch) for ch in value) + '"'


def json_array(values: Iterable[str]) -> str:
    """Encode strings as a compact JSON array."""
    return "[" + ",".join(json_string(value) for value in values) + "]"


def format_duration_us(us: int) -> str:
    """Render a duration in microseconds as µs, ms or s."""
    if us < 1_000:
        return f"{us}\u00b5s"
    if us < 1_000_000:
        return f"{us / 1_000:.1f}ms"
    return f"{us / 1_000_000:.2f}s"


def warning_text(warnings: Iterable[str]) -> str:
    """Render each warning on its own ``hifi: warning:`` line."""
    return "".join(f"hifi: warning: {warning}\n" for warning in warnings)