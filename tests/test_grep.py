import pytest

from hifi.grep import (
    GrepOptions,
    GrepResult,
    GrepUsageError,
    Hit,
    format_bytes,
    format_hit,
    grep_bytes,
    merge_chunk,
    parse_grep_args,
    snippet_window,
)

URL = "https://x.test/app.js"


def test_grep_bytes_caps_hits_and_records_omissions():
    options = GrepOptions(context=0, max_hits=2, max_bytes_per_hit=200)
    result = grep_bytes(URL, b"algolia\nalgolia\nalgolia", b"algolia", options)
    assert len(result.hits) == 2
    assert result.hits_not_printed == 1
    assert result.files_with_hits_not_printed == 1


def test_grep_bytes_centers_snippet_on_match_in_long_line():
    body = b"A" * 32 + b"target" + b"B" * 32
    options = GrepOptions(context=2, max_hits=10, max_bytes_per_hit=16)
    result = grep_bytes(URL, body, b"target", options)
    assert len(result.hits) == 1
    hit = result.hits[0]
    assert "target" in hit.snippet
    assert hit.snippet.startswith("\u2026") and hit.snippet.endswith("\u2026")
    assert hit.column == 33
    assert result.snippets_shortened == 1


def test_grep_bytes_snaps_window_to_utf8_boundaries():
    body = "padding éééééé target éééééé padding".encode()
    options = GrepOptions(context=0, max_hits=1, max_bytes_per_hit=12)
    result = grep_bytes(URL, body, b"target", options)
    assert len(result.hits) == 1
    assert "target" in result.hits[0].snippet
    assert "\ufffd" not in result.hits[0].snippet


def test_all_disables_hit_cap():
    options = GrepOptions(context=0, max_hits=None, max_bytes_per_hit=200)
    result = grep_bytes(URL, b"x\nx\nx", b"x", options)
    assert len(result.hits) == 3
    assert result.hits_not_printed == 0


def test_merge_chunk_enforces_global_cap():
    result = GrepResult()
    chunk = grep_bytes(URL, b"x\nx\nx", b"x", GrepOptions(context=0, max_hits=10))
    merge_chunk(result, chunk, 2)
    assert len(result.hits) == 2
    assert result.hits_not_printed == 1
    assert result.files_with_hits_not_printed == 1


def test_merge_chunk_without_cap_keeps_everything():
    result = GrepResult(files_failed=1)
    chunk = grep_bytes(URL, b"x\nx\nx", b"x", GrepOptions(context=0, max_hits=None))
    merge_chunk(result, chunk, None)
    assert len(result.hits) == 3
    assert result.files_failed == 1


def test_hits_report_line_and_column():
    result = grep_bytes(URL, b"one\ntwo TODO\n", b"TODO", GrepOptions(context=0))
    assert result.hits == [Hit(URL, 2, 5, "two TODO")]


def test_context_lines_are_joined_with_spaces():
    result = grep_bytes(URL, b"a\nb TODO\nc\n", b"TODO", GrepOptions(context=1))
    assert result.hits[0].snippet == "a b TODO c"


def test_snippet_window_returns_span_when_small():
    data = b"short line"
    assert snippet_window(data, 0, len(data), 0, 5, 200) == (0, len(data))


def test_snippet_window_long_match_returns_prefix():
    data = b"x" * 50
    assert snippet_window(data, 0, 50, 10, 20, 8) == (10, 18)


def test_snippet_window_never_exceeds_bounds():
    data = b"A" * 100 + b"needle" + b"B" * 100
    start, end = snippet_window(data, 0, len(data), 100, 6, 30)
    assert start <= 100 and end >= 106
    assert end - start <= 30


def test_format_bytes():
    assert format_bytes(512) == "512B"
    assert format_bytes(1024) == "1.0KB"
    assert format_bytes(1536) == "1.5KB"
    assert format_bytes(1024 * 1024) == "1.0MB"


def test_format_hit():
    assert format_hit(Hit("u", 3, 7, "snip")) == "u:3:7\tsnip"


def test_parse_grep_args_defaults_and_flags():
    url, pattern, options = parse_grep_args(["example.com", "TODO", "-C", "4", "--max-hits", "9"])
    assert (url, pattern) == ("example.com", "TODO")
    assert options.context == 4
    assert options.max_hits == 9
    assert options.max_bytes_per_hit == 200


def test_parse_grep_args_all_flag():
    _, _, options = parse_grep_args(["example.com", "x", "--all"])
    assert options.max_hits is None


@pytest.mark.parametrize(
    "args",
    [
        ["example.com"],
        ["example.com", ""],
        ["example.com", "x", "-C"],
        ["example.com", "x", "-C", "two"],
        ["example.com", "x", "--bogus"],
        ["example.com", "x", "extra"],
    ],
)
def test_parse_grep_args_errors(args):
    with pytest.raises(GrepUsageError):
        parse_grep_args(args)


def test_empty_pattern_rejected():
    with pytest.raises(ValueError):
        grep_bytes(URL, b"abc", b"", GrepOptions())