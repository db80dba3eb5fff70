"""Tests for OpenAI request parameter assembly"""
import pytest

from core.llm_client import OpenAIClient, get_llm_client


def _params(model, **kwargs):
    client = OpenAIClient(api_key="sk-test", model=model)
    defaults = dict(
        prompt="Write.",
        system_prompt="You are an editor.",
        temperature=0.7,
        max_tokens=8000,
        response_format="text",
        stream=True,
    )
    defaults.update(kwargs)
    return client._build_params(**defaults)


def test_thinking_tokens_set_reasoning_budget():
    params = _params("gpt-5", thinking_tokens=4000)
    assert params["reasoning_effort"] == "low"
    assert params["max_completion_tokens"] == 12000
    assert "temperature" not in params
    assert params["messages"][0]["role"] == "developer"

    assert _params("gpt-5", thinking_tokens=20000)["reasoning_effort"] == "high"
    assert _params("gpt-5", thinking_tokens=64000)["reasoning_effort"] == "high"


def test_zero_thinking_tokens_leaves_effort_unset():
    params = _params("o4-mini", thinking_tokens=0)
    assert "reasoning_effort" not in params
    assert params["max_completion_tokens"] == 8000


def test_standard_model_ignores_thinking_tokens():
    params = _params("gpt-4o", thinking_tokens=4000, response_format="json")
    assert "reasoning_effort" not in params
    assert params["max_tokens"] == 8000
    assert params["temperature"] == 0.7
    assert params["response_format"] == {"type": "json_object"}
    assert params["messages"][0]["role"] == "system"


def test_unknown_response_format_and_provider():
    with pytest.raises(ValueError):
        _params("gpt-4o", response_format="yaml")
    with pytest.raises(ValueError):
        get_llm_client(provider="claude", api_key="x")
