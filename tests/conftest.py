"""
Pytest fixtures shared by the shot-coach tests.
"""
import json
from collections.abc import Callable

import httpx
import pytest

from shot_coach.analytics import Attempt
from shot_coach.llm import ChatCompletionClient, ChatMessage

BASE_URL = "http://provider.test/v1"


def completion_body(content: str = "Keep your elbow in.") -> dict:
    return {
        "id": "chatcmpl-1",
        "model": "llama3.2",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 12, "completion_tokens": 5, "total_tokens": 17},
    }


def delta_frame(text: str) -> bytes:
    return f"data: {json.dumps({'choices': [{'delta': {'content': text}}]})}\n".encode()


def chunked(*chunks: bytes, fail_with: Exception | None = None):
    """Async byte stream delivering the given chunks, optionally failing afterwards."""
    reads = []

    async def body():
        for chunk in chunks:
            reads.append(chunk)
            yield chunk
        if fail_with is not None:
            raise fail_with

    return body(), reads


@pytest.fixture
def make_client() -> Callable[..., ChatCompletionClient]:
    """Build a client whose requests are answered by `handler`."""
    def factory(handler, **kwargs) -> ChatCompletionClient:
        kwargs.setdefault("default_model", "llama3.2")
        return ChatCompletionClient(BASE_URL, transport=httpx.MockTransport(handler), **kwargs)
    return factory


@pytest.fixture
def conversation() -> list[ChatMessage]:
    return [
        ChatMessage("system", "You are a shooting coach."),
        ChatMessage("user", "Why do I miss left?"),
    ]


@pytest.fixture
def attempts() -> list[Attempt]:
    return [
        Attempt(x=2.0, y=-1.0, err=2.2, hit=True, angle=51.0),
        Attempt(x=4.0, y=1.0, err=4.1, hit=True, angle=52.5),
        Attempt(x=-1.0, y=3.0, err=3.2, hit=False, angle=49.0),
        Attempt(x=3.0, y=-3.0, err=4.2, hit=False, angle=50.0),
    ]
