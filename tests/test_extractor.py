from gfx_interpreter.services.extractor import close_truncated, extract, extract_payload


def test_fenced_block_is_extracted():
    text = 'Here you go:\n```json\n{"action": "create", "elements": []}\n```\nEnjoy!'

    result = extract_payload(text)

    assert result is not None
    assert result.payload == {"action": "create", "elements": []}
    assert result.repaired is False


def test_bare_object_between_prose():
    text = 'Sure! {"type": "update", "elements": [{"name": "Score"}]} Let me know.'

    assert extract(text) == {"type": "update", "elements": [{"name": "Score"}]}


def test_first_parseable_candidate_wins():
    text = (
        "```json\n{not valid json}\n```\n"
        "Try this instead:\n"
        '```json\n{"type": "create", "elements": [{"name": "A"}]}\n```\n'
        '```json\n{"type": "delete"}\n```'
    )

    assert extract(text) == {"type": "create", "elements": [{"name": "A"}]}


def test_braces_inside_strings_do_not_split_objects():
    text = 'Result: {"type": "create", "elements": [{"name": "Curly }{ name"}]}'

    assert extract(text)["elements"][0]["name"] == "Curly }{ name"


def test_truncated_reply_is_closed():
    text = (
        "```json\n"
        '{"action": "create", "elements": [{"name": "Box", "x": 10}, {"name": "Ti'
    )

    result = extract_payload(text)

    assert result is not None
    assert result.repaired is True
    assert result.payload["action"] == "create"
    assert result.payload["elements"][0] == {"name": "Box", "x": 10}


def test_dangling_key_is_dropped():
    result = extract_payload('{"type": "create", "elements": [{"name": "A"}], "animations":')

    assert result is not None
    assert result.repaired is True
    assert result.payload == {"type": "create", "elements": [{"name": "A"}]}


def test_no_json_returns_none():
    assert extract_payload("I can't change the scene right now.") is None
    assert extract("") is None


def test_top_level_array_is_not_a_payload():
    assert extract("```json\n[1, 2, 3]\n```") is None


def test_close_truncated_drops_trailing_comma():
    assert close_truncated('{"a": [1, 2, ') == {"a": [1, 2]}


def test_close_truncated_cuts_back_to_last_complete_value():
    assert close_truncated('{"a": 1, "b": tru') == {"a": 1}


def test_close_truncated_rejects_non_objects():
    assert close_truncated("[1, 2") is None


def test_malformed_complete_payload_keeps_later_keys():
    text = '{"elements":[{"name":"Box"},], "animations":[{"element_name":"Box","phase":"in"}]}'

    result = extract_payload(text)

    assert result is not None
    assert result.repaired is False
    assert result.payload["elements"] == [{"name": "Box"}]
    assert result.payload["animations"] == [{"element_name": "Box", "phase": "in"}]
