from vidcast.features.analyzers.data.parsing import extract_json_object, as_int, as_float, as_text


def test_extracts_object_from_fenced_prose():
    raw = 'Sure! Here you go:\n```json\n{"title": "Quarterly Review", "tags": ["finance", "q3"]}\n```\nHope that helps.'
    assert extract_json_object(raw) == {"title": "Quarterly Review", "tags": ["finance", "q3"]}


def test_skips_brace_noise_before_the_object():
    raw = 'Use {curly} braces like so: {"suggestedStartMs": 4200, "confidence": "high"}'
    assert extract_json_object(raw) == {"suggestedStartMs": 4200, "confidence": "high"}


def test_returns_none_without_json():
    assert extract_json_object("I could not find anything.") is None
    assert extract_json_object("") is None
    assert extract_json_object("[1, 2, 3]") is None


def test_coercion_helpers():
    assert as_int("4200") == 4200
    assert as_int(4200.9) == 4200
    assert as_int("soon") is None
    assert as_float(None) == 0.0
    assert as_float("x", -1.0) == -1.0
    assert as_text(["#ai", " ", "#shorts"]) == "#ai, #shorts"
    assert as_text("  ") is None
