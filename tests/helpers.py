BASE_URL = "https://api.test-openai.com/v1"


def api(path: str) -> str:
    return f"{BASE_URL}/{path}"


def chat_reply(content):
    return {"id": "chatcmpl-1", "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}
