import json
import random

import pytest

from openai_http_sdk import APIError, InputError, InvalidResponseError, Voice

from .helpers import api


def test_text_to_speech_streams_to_file(client, router, tmp_path):
    route = router.post(api("audio/speech")).respond(200, content=b"ID3 mp3 data")
    target = tmp_path / "hello.mp3"

    path = client.text_to_speech("Hello there", target, voice="nova")

    assert path == target
    assert target.read_bytes() == b"ID3 mp3 data"
    assert json.loads(route.calls.last.request.content) == {
        "model": "tts-1",
        "input": "Hello there",
        "voice": "nova",
    }


def test_voice_is_drawn_from_injected_rng(client, router, tmp_path):
    route = router.post(api("audio/speech")).respond(200, content=b"audio")

    client.text_to_speech("Hi", tmp_path / "a.mp3")

    expected = random.Random(7).choice(list(Voice)).value
    assert json.loads(route.calls.last.request.content)["voice"] == expected


def test_unknown_voice_is_rejected(client, router, tmp_path):
    route = router.post(api("audio/speech")).respond(200, content=b"audio")

    with pytest.raises(InputError):
        client.text_to_speech("Hi", tmp_path / "a.mp3", voice="robot")

    assert not route.called


def test_open_file_launches_default_app(client, router, tmp_path, monkeypatch):
    router.post(api("audio/speech")).respond(200, content=b"audio")
    opened = []
    monkeypatch.setattr("openai_http_sdk.audio.open_with_default_app", opened.append)

    path = client.audio.text_to_speech("Hi", tmp_path / "a.mp3", voice="alloy", open_file=True)

    assert opened == [path]


def test_speech_failure_raises(client, router, tmp_path):
    router.post(api("audio/speech")).respond(500, text="server error")

    with pytest.raises(APIError):
        client.text_to_speech("Hi", tmp_path / "a.mp3", voice="alloy")


def test_transcribe_sends_two_part_multipart(client, router, tmp_path):
    audio_bytes = bytes(range(256)) * 4
    audio = tmp_path / "clip.wav"
    audio.write_bytes(audio_bytes)
    route = router.post(api("audio/transcriptions")).respond(200, json={"text": "hello world"})

    assert client.transcribe_audio(audio) == "hello world"

    request = route.calls.last.request
    content_type = request.headers["Content-Type"]
    assert content_type.startswith("multipart/form-data; boundary=")
    boundary = content_type.split("boundary=", 1)[1].encode()

    sections = request.content.split(b"--" + boundary)
    assert sections[0] == b""
    assert sections[-1] == b"--\r\n"
    file_part, model_part = sections[1:-1]

    assert b'name="file"; filename="clip.wav"' in file_part
    assert b"Content-Type: audio/wav" in file_part
    assert file_part.endswith(b"\r\n\r\n" + audio_bytes + b"\r\n")
    assert b'name="model"' in model_part
    assert model_part.endswith(b"\r\n\r\nwhisper-1\r\n")
    assert request.headers["Authorization"] == "Bearer sk-test"


def test_transcribe_missing_file_makes_no_request(client, router, tmp_path):
    route = router.post(api("audio/transcriptions")).respond(200, json={"text": "x"})

    with pytest.raises(InputError):
        client.transcribe_audio(tmp_path / "missing.wav")

    assert not route.called


def test_transcribe_without_text_is_an_error(client, router, tmp_path):
    audio = tmp_path / "clip.wav"
    audio.write_bytes(b"RIFF")
    router.post(api("audio/transcriptions")).respond(200, json={"result": "?"})

    with pytest.raises(InvalidResponseError):
        client.audio.transcribe(audio, model="whisper-large")


def test_speech_into_missing_directory_makes_no_request(client, router, tmp_path):
    route = router.post(api("audio/speech")).respond(200, content=b"audio")

    with pytest.raises(InputError):
        client.text_to_speech("Hi", tmp_path / "nowhere" / "a.mp3", voice="alloy")

    assert not route.called
