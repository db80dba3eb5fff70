"""Shared pytest fixtures for ScholarScribe"""
from typing import Iterator, List, Optional

import pytest

from core.llm_client import LLMClient
from prompts.form_options import new_form


class FakeLLMClient(LLMClient):
    """Scripted LLM client

    Args:
        responses: Texts returned by successive generate() calls
        streams: Chunk lists yielded by successive generate_streaming() calls;
            an Exception instance in a list is raised at that point
    """

    def __init__(self, responses: Optional[List] = None, streams: Optional[List[List]] = None):
        self.responses = list(responses or [])
        self.streams = list(streams or [])
        self.calls = []

    def generate(self, prompt: str, **kwargs) -> str:
        self.calls.append(("generate", prompt, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def generate_streaming(self, prompt: str, **kwargs) -> Iterator[str]:
        self.calls.append(("stream", prompt, kwargs))
        chunks = self.streams.pop(0)
        for chunk in chunks:
            if isinstance(chunk, Exception):
                raise chunk
            yield chunk


@pytest.fixture()
def fake_llm():
    return FakeLLMClient


@pytest.fixture()
def form():
    return new_form(title="Water Scarcity in Kurdistan", pages=10)
