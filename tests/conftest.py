"""Shared fixtures: a fake google-genai client recording every request"""

from types import SimpleNamespace

import pytest

from fashiongen_studio.config import Settings
from fashiongen_studio.core import FashionImageService


def inline_part(data, mime_type="image/jpeg"):
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)


def text_part(text):
    return SimpleNamespace(inline_data=None, text=text)


def make_response(parts=None, text=None, candidates=True):
    """Build a response shaped like GenerateContentResponse"""
    if not candidates:
        return SimpleNamespace(candidates=[], text=text)
    content = SimpleNamespace(parts=parts) if parts is not None else None
    return SimpleNamespace(candidates=[SimpleNamespace(content=content)], text=text)


class FakeModels:
    def __init__(self):
        self.calls = []
        self.response = make_response(parts=[])
        self.error = None

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class FakeChat:
    def __init__(self, model, config, reply="Try a camel trench coat."):
        self.model = model
        self.config = config
        self.reply = reply
        self.sent = []
        self.error = None

    async def send_message(self, message):
        self.sent.append(message)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.reply)


class FakeChats:
    def __init__(self):
        self.created = []

    def create(self, *, model, config=None):
        chat = FakeChat(model, config)
        self.created.append(chat)
        return chat


class FakeClient:
    def __init__(self):
        self.aio = SimpleNamespace(models=FakeModels(), chats=FakeChats())

    @property
    def calls(self):
        return self.aio.models.calls


@pytest.fixture
def settings(tmp_path):
    return Settings(gemini_api_key="test-key", export_dir=str(tmp_path / "exports"))


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def service(fake_client, settings):
    return FashionImageService(client=fake_client, settings=settings)
