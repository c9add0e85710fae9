from hifi.jsonscan import Event, EventKind, Parser, Visit, object_keys, walk


def strings(data):
    return [v.text for v in walk(data) if not v.is_key]


def test_object_keys_at_root():
    data = rb'{"a":1,"b":[1,2,3],"c":{"x":1}}'
    assert object_keys(data, None) == ["a", "b", "c"]


def test_object_keys_under_named_object():
    data = rb'{"pages":{"/foo":[],"/bar":[]},"other":"x"}'
    assert object_keys(data, "pages") == ["/foo", "/bar"]


def test_object_keys_missing_parent_or_bad_root():
    assert object_keys(rb'{"a":{"b":1}}', "pages") is None
    assert object_keys(rb'["a"]', None) is None
    assert object_keys(rb'{"pages":[1]}', "pages") is None
    assert object_keys(rb'{"a":1', None) is None


def test_walk_strings_visits_with_key_context():
    data = rb'{"href":"/dashboard","nested":{"action":"/api"}}'
    hits = [(v.parent, v.text) for v in walk(data) if not v.is_key]
    assert hits == [("href", "/dashboard"), ("action", "/api")]


def test_walk_reports_keys():
    data = rb'{"href":"/dashboard","nested":{"action":"/api"}}'
    keys = [v.text for v in walk(data) if v.is_key]
    assert keys == ["href", "nested", "action"]


def test_walk_strings_handles_array_elements():
    assert strings(rb'{"deps":["/a","/b"]}') == ["/a", "/b"]


def test_array_elements_inherit_parent_key():
    visits = list(walk(rb'{"routes":["/a"]}'))
    assert visits == [Visit(True, "routes"), Visit(False, "/a", "routes")]


def test_parent_key_restored_after_nested_object():
    data = rb'{"outer":["/x",{"inner":"/y"},"/z"]}'
    hits = [(v.parent, v.text) for v in walk(data) if not v.is_key]
    assert hits == [("outer", "/x"), ("inner", "/y"), ("outer", "/z")]


def test_handles_escapes():
    assert strings(rb'{"k":"a\/b\nA"}') == ["a/b\nA"]


def test_handles_unicode_escape():
    assert strings(rb'{"k":"caf\u00e9"}') == ["caf\u00e9"]


def test_handles_unicode_surrogate_pairs():
    assert strings(rb'{"k":"route-\ud83d\ude00"}') == ["route-\U0001f600"]


def test_rejects_unpaired_surrogates():
    assert strings(rb'{"k":"route-\ud83d"}') == []


def test_rejects_lone_low_surrogate_and_bad_escape():
    assert strings(rb'{"k":"\udc00"}') == []
    assert strings(rb'{"k":"\q"}') == []


def test_parser_event_sequence():
    data = rb'{"a":[1,true,null],"b":"x"}'
    events = list(Parser(data))
    assert events == [
        Event(EventKind.BEGIN_OBJECT),
        Event(EventKind.KEY, "a"),
        Event(EventKind.BEGIN_ARRAY),
        Event(EventKind.NUMBER),
        Event(EventKind.BOOL),
        Event(EventKind.NULL),
        Event(EventKind.END_ARRAY),
        Event(EventKind.KEY, "b"),
        Event(EventKind.STRING, "x"),
        Event(EventKind.END_OBJECT),
    ]


def test_parser_stops_on_mismatched_close_and_missing_comma():
    assert [e.kind for e in Parser(b"[}")] == [EventKind.BEGIN_ARRAY]
    assert [e.kind for e in Parser(b"[1 2]")] == [EventKind.BEGIN_ARRAY, EventKind.NUMBER]
    assert [e.kind for e in Parser(b"[tru]")] == [EventKind.BEGIN_ARRAY]


def test_key_requires_colon():
    parser = Parser(b'{"a" 1}')
    assert parser.next_event() == Event(EventKind.BEGIN_OBJECT)
    assert parser.next_event() is None


def test_skip_value_skips_nested_structure():
    parser = Parser(rb'{"a":{"x":[1,{"y":2}]},"b":"kept"}')
    assert parser.next_event() == Event(EventKind.BEGIN_OBJECT)
    assert parser.next_event() == Event(EventKind.KEY, "a")
    assert parser.skip_value() is True
    assert parser.next_event() == Event(EventKind.KEY, "b")
    assert parser.next_event() == Event(EventKind.STRING, "kept")


def test_skip_value_fails_on_truncated_input():
    parser = Parser(rb'{"a":{"x":1')
    parser.next_event()
    parser.next_event()
    assert parser.skip_value() is False