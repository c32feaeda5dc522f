from types import SimpleNamespace

import pytest


def make_response(*contents, response_id="chatcmpl-test"):
    choices = [SimpleNamespace(message=SimpleNamespace(role="assistant", content=c)) for c in contents]
    return SimpleNamespace(id=response_id, choices=choices)


class FakeCompletions:
    def __init__(self, response=None, error=None):
        self.response = response if response is not None else make_response("explained")
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class FakeOpenAI:
    """Stands in for `openai.OpenAI`, exposing only `chat.completions.create`."""

    def __init__(self, response=None, error=None):
        self.completions = FakeCompletions(response=response, error=error)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("OPENAI_API_KEY", "OPENAI_BASE_URL", "AICOMMAND_MODEL", "AICOMMAND_LOGLEVEL", "LANG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SHELL", "/bin/sh")
    return monkeypatch
