import random

import pytest
import respx

from openai_http_sdk import OpenAIClient, CredentialStore
from openai_http_sdk import utils

from .helpers import BASE_URL


class _WhitespaceEncoding:
    """Stands in for a tiktoken encoding so tests never fetch BPE files."""

    def encode(self, text):
        return text.split()


@pytest.fixture(autouse=True)
def offline_tokenizer(monkeypatch):
    monkeypatch.setattr(utils, "get_encoding", lambda: _WhitespaceEncoding())


@pytest.fixture
def environ():
    return {"OPENAI_API_TOKEN": "sk-test", "OPENAI_ORG_ID": "org-test"}


@pytest.fixture
def credentials(environ):
    return CredentialStore(environ=environ)


@pytest.fixture
def client(credentials):
    c = OpenAIClient(credentials=credentials, rng=random.Random(7), base_url=BASE_URL)
    yield c
    c.close()


@pytest.fixture
def router():
    with respx.mock(assert_all_called=False) as rs:
        yield rs
