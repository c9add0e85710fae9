from urllib.parse import urlsplit

import pytest

from hifi.resolve import (
    ends_with_ignore_case,
    manifest_matches,
    path_contains_any,
    resolve_prefixed,
    resolve_prefixed_or_under,
    resolve_remix,
    resolve_under,
    should_skip_fragments,
)

BASE = "https://example.com/some/page"


def _path(url):
    return urlsplit(url).path


def test_ends_with_ignore_case():
    assert ends_with_ignore_case("/x/_PAYLOAD.JSON", "_payload.json")
    assert not ends_with_ignore_case("json", "_payload.json")
    assert ends_with_ignore_case("anything", "")


def test_path_contains_any():
    assert path_contains_any("/_nuxt/builds/a", ["/builds/", "/zzz/"])
    assert not path_contains_any("/_nuxt/a.js", ["/builds/"])


def test_manifest_matches_suffix_contains_and_gated():
    assert manifest_matches("/app/build/manifest.js", ["/manifest.js", "/manifest.json"], [], [])
    assert manifest_matches("/a/special/b", [], ["/special/"], [])
    gated = [("/_nuxt/builds/", ".json")]
    assert manifest_matches("/_nuxt/builds/meta/abc.JSON", [], [], gated)
    assert not manifest_matches("/_nuxt/builds/meta/abc.js", [], [], gated)
    assert not manifest_matches("/other/abc.json", [], [], gated)


def test_should_skip_fragments_requires_anchor():
    assert should_skip_fragments("https://example.com/_next/static/x/hmr.js", "/_next/", ["hmr"])
    assert not should_skip_fragments("https://example.com/static/x/hmr.js", "/_next/", ["hmr"])
    assert not should_skip_fragments("https://example.com/_next/static/a.js", "/_next/", ["hmr"])


def test_resolve_prefixed():
    raw = "_nuxt/entry.js"
    resolved = resolve_prefixed(BASE, raw, "_nuxt/")
    assert resolved == "https://example.com/_nuxt/entry.js"
    assert resolve_prefixed(BASE, "other/entry.js", "_nuxt/") is None


def test_resolve_under_requires_context_and_prefix():
    raw = "chunks/a.js"
    assert resolve_under(BASE, raw, False, ["chunks/"], "/_app/immutable/") is None
    assert resolve_under(BASE, "misc/a.js", True, ["chunks/"], "/_app/immutable/") is None
    resolved = resolve_under(BASE, raw, True, ["chunks/"], "/_app/immutable/")
    assert _path(resolved) == "/_app/immutable/" + raw
    assert urlsplit(resolved).netloc == urlsplit(BASE).netloc


def test_resolve_prefixed_or_under_prefers_prefix():
    prefixed = resolve_prefixed_or_under(BASE, "_nuxt/a.js", True, "_nuxt/", ["_nuxt/"], "/mnt/")
    assert _path(prefixed) == "/_nuxt/a.js"
    under = resolve_prefixed_or_under(BASE, "chunk/a.js", True, "_nuxt/", ["chunk/"], "/_nuxt/")
    assert _path(under) == "/_nuxt/chunk/a.js"
    assert resolve_prefixed_or_under(BASE, "chunk/a.js", False, "_nuxt/", ["chunk/"], "/_nuxt/") is None


@pytest.mark.parametrize("context", [True, False])
def test_resolve_remix_build_prefix(context):
    assert _path(resolve_remix(BASE, "build/root.js", context)) == "/build/root.js"


def test_resolve_remix_routes_need_context():
    raw = "routes/index.js"
    assert resolve_remix(BASE, raw, False) is None
    assert _path(resolve_remix(BASE, raw, True)) == "/build/" + raw
    assets = "assets/routes/index.js"
    assert _path(resolve_remix(BASE, assets, True)) == "/" + assets
    assert resolve_remix(BASE, assets, False) is None
    assert resolve_remix(BASE, "misc.js", True) is None