import base64
import json

import httpx
import pytest

from openai_http_sdk import APIError, InputError, InvalidResponseError

from .helpers import api, chat_reply


def sent_json(route):
    return json.loads(route.calls.last.request.content)


def test_complete_sends_system_and_user_messages(client, router):
    route = router.post(api("chat/completions")).respond(200, json=chat_reply("4"))

    answer = client.chat.complete("2+2?", system_prompt="Be terse.", max_tokens=5, temperature=0.0)

    assert answer == "4"
    body = sent_json(route)
    assert body["messages"] == [
        {"role": "system", "content": "Be terse."},
        {"role": "user", "content": "2+2?"},
    ]
    assert body["model"] == "gpt-4o"
    assert body["max_tokens"] == 5
    assert body["temperature"] == 0.0


def test_complete_uses_configured_defaults(client, router):
    route = router.post(api("chat/completions")).respond(200, json=chat_reply("hi"))

    client.chat.complete("hello")

    body = sent_json(route)
    assert body["messages"][0] == {"role": "system", "content": "You are a helpful assistant."}
    assert body["max_tokens"] == 1024
    assert body["temperature"] == 0.7


def test_overrides_replace_system_prompt(client, router):
    route = router.post(api("chat/completions")).respond(200, json=chat_reply("ok"))

    client.chat.complete("hello", system_prompt="ignored", overrides='{"system_prompt": "Speak like a pirate."}')

    assert sent_json(route)["messages"][0]["content"] == "Speak like a pirate."


@pytest.mark.parametrize("overrides", ["{broken", "[1, 2]", '{"system_prompt": 3}'])
def test_bad_overrides_fall_back_to_default(client, router, overrides):
    route = router.post(api("chat/completions")).respond(200, json=chat_reply("ok"))

    assert client.chat.complete("hello", overrides=overrides) == "ok"
    assert sent_json(route)["messages"][0]["content"] == "You are a helpful assistant."


def test_query_sends_single_system_message(client, router):
    route = router.post(api("chat/completions")).respond(200, json=chat_reply("Paris"))

    assert client.chat.query("Capital of France?") == "Paris"
    assert sent_json(route)["messages"] == [{"role": "system", "content": "Capital of France?"}]


@pytest.mark.parametrize("payload", [
    {"choices": []},
    {"choices": [{"message": {}}]},
    {"choices": [{"message": {"content": "   "}}]},
    {"data": []},
])
def test_missing_content_is_an_error(client, router, payload):
    router.post(api("chat/completions")).respond(200, json=payload)

    with pytest.raises(InvalidResponseError):
        client.chat.complete("hello")


def test_vision_embeds_base64_image(client, router, tmp_path):
    image = tmp_path / "cat.png"
    image.write_bytes(b"\x89PNG\r\n\x1a\nfake")
    route = router.post(api("chat/completions")).respond(200, json=chat_reply("A cat."))

    assert client.chat.vision("What is this?", image) == "A cat."

    content = sent_json(route)["messages"][0]["content"]
    assert content[0] == {"type": "text", "text": "What is this?"}
    assert content[1]["type"] == "image_url"
    url = content[1]["image_url"]["url"]
    assert url.startswith("data:image/png;base64,")
    assert base64.b64decode(url.split(",", 1)[1]) == image.read_bytes()


def test_vision_missing_file_makes_no_request(client, router, tmp_path):
    route = router.post(api("chat/completions")).respond(200, json=chat_reply("never"))

    with pytest.raises(InputError):
        client.chat.vision("What is this?", tmp_path / "missing.png")

    assert not route.called


def test_chat_session_keeps_history(client, router):
    route = router.post(api("chat/completions"))
    route.side_effect = [
        httpx.Response(200, json=chat_reply("Hello!")),
        httpx.Response(200, json=chat_reply("You said hi.")),
    ]
    session = client.new_chat(system_prompt="Be kind.")

    session.generate("hi")
    session.generate("what did I say?")

    assert [m["role"] for m in session.get_history()] == ["system", "user", "assistant", "user", "assistant"]
    assert len(sent_json(route)["messages"]) == 4


def test_chat_session_trims_oldest_messages(client, router):
    router.post(api("chat/completions")).respond(200, json=chat_reply("ok"))
    session = client.new_chat(system_prompt="sys")
    session.max_history_tokens = 6
    session.history += [
        {"role": "user", "content": "one two three"},
        {"role": "assistant", "content": "four five"},
    ]

    session.generate("six seven")

    history = session.get_history()
    assert history[0] == {"role": "system", "content": "sys"}
    assert {"role": "user", "content": "one two three"} not in history
    assert history[-2] == {"role": "user", "content": "six seven"}


def test_chat_session_drops_unanswered_turn_on_failure(client, router):
    route = router.post(api("chat/completions"))
    route.side_effect = [
        httpx.Response(503, text="overloaded"),
        httpx.Response(200, json=chat_reply("Hello!")),
    ]
    session = client.new_chat(system_prompt="Be kind.")

    with pytest.raises(APIError):
        session.generate("hi")
    assert session.get_history() == [{"role": "system", "content": "Be kind."}]

    session.generate("hi again")

    assert [m["role"] for m in sent_json(route)["messages"]] == ["system", "user"]
