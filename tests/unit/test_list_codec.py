from job_tracker.core.list_codec import any_item_contains, decode_list, encode_list, encoded_item


def test_empty_list_encodes_to_none() -> None:
    assert encode_list([]) is None
    assert encode_list(None) is None


def test_encode_then_decode_preserves_order() -> None:
    raw = encode_list(["python", "remote", "backend"])
    assert raw == '["python", "remote", "backend"]'
    assert decode_list(raw) == ["python", "remote", "backend"]


def test_decode_tolerates_missing_and_malformed_values() -> None:
    assert decode_list(None) == []
    assert decode_list("   ") == []
    assert decode_list("[not json") == []
    assert decode_list('{"a": 1}') == []
    assert decode_list('["ok", 3]') == []


def test_encoded_item_matches_whole_items_only() -> None:
    raw = encode_list(["javascript", "go"])
    assert encoded_item("go") in raw
    assert encoded_item("java") not in raw


def test_any_item_contains_ignores_json_framing() -> None:
    raw = encode_list(["Python", "remote"])
    assert any_item_contains(raw, "pyth")
    assert not any_item_contains(raw, '"')
    assert not any_item_contains(raw, ",")
    assert not any_item_contains(None, "python")
