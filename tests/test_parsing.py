import json

from app_builder.generate.parsing import extract_json_object, parse_agent_response, parse_key_values


def test_strict_json_object():
    assert parse_agent_response('{"a": 1}') == {"a": 1}


def test_top_level_array_is_not_an_object():
    assert parse_agent_response("[1, 2, 3]") is None


def test_fenced_block():
    text = 'Here you go:\n```json\n{"design": {"theme": "dark"}}\n```\nEnjoy.'
    assert parse_agent_response(text) == {"design": {"theme": "dark"}}


def test_object_embedded_in_prose_with_braces_in_strings():
    text = 'Sure! {"code": "function f() { return 1; }", "n": 2} Hope this helps {not json}'
    assert parse_agent_response(text) == {"code": "function f() { return 1; }", "n": 2}


def test_skips_broken_candidates():
    text = "{oops} and then {\"ok\": true}"
    assert extract_json_object(text) == {"ok": True}


def test_no_object_at_all():
    assert parse_agent_response("I cannot help with that.") is None
    assert parse_agent_response("") is None


def test_key_value_lines():
    text = "Architecture: microservices\n- Database: PostgreSQL\nnot a pair\n\"cache\": \"redis\","
    assert parse_key_values(text) == {
        "Architecture": "microservices",
        "Database": "PostgreSQL",
        "cache": "redis",
    }


def test_cut_off_answer_does_not_yield_a_nested_object():
    answer = json.dumps({"architecture": {"pattern": "mvc", "notes": "x"}, "stack": {"db": "pg"}})
    assert parse_agent_response(answer[:-10]) is None
    assert extract_json_object('{"a": {"b": 1}, "c": oops} trailing') is None


def test_broken_object_is_skipped_as_a_whole():
    text = '{"a": {"inner": 1}, bad} then {"ok": 1}'
    assert extract_json_object(text) == {"ok": 1}
