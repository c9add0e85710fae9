# hifi

Pure-Python building blocks for pulling internal APIs and client routes out of
the bytes a web application ships: HTML pages, JavaScript bundles and framework
manifests. It uses only the standard library.

## What is inside

- `hifi.literal`: `LiteralSet` finds a fixed set of literals in bytes. It returns
  the leftmost match, takes the longest literal at each position and never
  returns overlapping matches. Each match is a `LiteralMatch` with `start`, `end` and `value`.
- `hifi.jsonscan`: a small streaming JSON scanner. `Parser` yields `Event`
  values through `next_event()` and `skip_value()`. `walk(data)` yields a
  `Visit` for every object key and every string value, and gives each string
  its parent key. `object_keys(data, parent_key)` lists the keys of the root
  object, or of the object stored under a top-level key. The scanner accepts
  the JSON that production frameworks emit. On any other input it stops and
  raises no error.
- `hifi.grep`: grep over raw bytes. `grep_bytes(url, data, pattern, options)`
  finds every non-overlapping match. Each snippet includes the configured
  number of context lines, and long lines are trimmed to a window centred on
  the match and cut only at UTF-8 character boundaries. `merge_chunk` combines
  results under a global hit cap. `parse_grep_args` parses
  `<url> <pattern> [-C N] [--max-hits N] [--max-bytes-per-hit N] [-a|--all]`
  and raises `GrepUsageError` on bad input. `format_hit` and `format_bytes`
  render the output.
- `hifi.nextparser`: Next.js helpers. It provides `NextConfig`, `strip_locale`,
  `normalize_app_route`, `route_from_app_key`, `parse_app_build_manifest` and
  `parse_client_reference_manifest`.
- `hifi.resolve`: helpers for resolving asset URLs, deciding which URLs to skip
  and matching manifest paths. URLs are plain absolute URL strings.
- `hifi.site`: `FrameworkId` (Next.js, Nuxt, SvelteKit, Astro, Remix, Angular)
  and `DetectedSite`. `DetectedSite` is a record of which frameworks are
  active and which one is primary. It offers `has()` and `label()`.
- `hifi.render`: text and JSON formatting helpers. These are `first_segment`,
  `short_methods`, `pretty_flags`, `json_string`, `json_array`,
  `format_duration_us` and `warning_text`.
- `hifi.policies`: `parse_policies(text)` reads a TOML policy document and
  returns a `Policies` object. The object holds the literal tables and a list
  of `FixedClientPattern` entries. `build_hash(version, raw, rev)` computes an
  FNV-1a fingerprint as 16 hex digits.
- `hifi.hash`: `FxHasher`, a fast non-cryptographic incremental hasher, and
  `hash128_hex`, which returns a 32-hex-digit digest.

## Examples

Match several literals at once:

```python
from hifi.literal import LiteralSet

found = LiteralSet([("ab", 1), ("abc", 2), ("bc", 3)])
[(m.start, m.end, m.value) for m in found.find_iter(b"xabcabc")]
# [(1, 4, 2), (4, 7, 2)]
```

Read keys out of a JSON manifest without building a tree:

```python
from hifi.jsonscan import object_keys

object_keys(b'{"pages":{"/foo":[],"/bar":[]},"other":"x"}', "pages")
# ['/foo', '/bar']
```

Turn App Router file paths into the URLs users see:

```python
from hifi.nextparser import normalize_app_route, strip_locale

normalize_app_route("/(marketing)/about")      # '/about'
normalize_app_route("/dashboard/@modal/login") # '/dashboard/login'
strip_locale("/fr/dashboard", ["en", "fr"])    # '/dashboard'
```

Search bytes the way grep does, with a cap on printed hits:

```python
from hifi.grep import GrepOptions, grep_bytes

options = GrepOptions(context=0, max_hits=2, max_bytes_per_hit=200)
result = grep_bytes("https://x.test/app.js", b"algolia\nalgolia\nalgolia", b"algolia", options)
len(result.hits), result.hits_not_printed   # (2, 1)
```

Load a policy table:

```python
from hifi.policies import parse_policies

policies = parse_policies('[scan.bad_ext]\nexts = [".png"]\n')
policies.bad_exts   # ('.png',)
```

## What it does not do

This is a library of parts, not a finished tool:

- It has no command-line program.
- It does not fetch anything over the network. You pass in the bytes and URLs.
- It does not detect frameworks from page content. `DetectedSite` only holds
  the result of detection that your own code performs.
- It has no complete endpoint scanner and no result cache.

## Running the tests

Install the `test` extra and run pytest from the project directory.