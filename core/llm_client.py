"""LLM client abstraction layer for ScholarScribe"""
from typing import Dict, Iterator, Optional
import logging
from abc import ABC, abstractmethod
from openai import OpenAI, AzureOpenAI
import config

logger = logging.getLogger(__name__)

# Response-format hints accepted by generate()/generate_streaming()
RESPONSE_FORMATS = {
    "text": None,
    "json": {"type": "json_object"},
}


class LLMClient(ABC):
    """Abstract base class for LLM clients"""

    @abstractmethod
    def generate(self, prompt: str, **kwargs) -> str:
        """Generate text from a prompt"""
        pass

    @abstractmethod
    def generate_streaming(self, prompt: str, **kwargs) -> Iterator[str]:
        """Generate text from a prompt, yielding text deltas"""
        pass


class OpenAIClient(LLMClient):
    """OpenAI chat-completions client"""

    # Reasoning models that do not support temperature/top_p
    _REASONING_PREFIXES = ("gpt-5", "o3", "o4")

    # Reasoning token budget per effort level; thinking_tokens picks the
    # smallest level whose budget covers it
    _REASONING_BUDGETS = {
        "low":    8192,
        "medium": 16384,
        "high":   32768,
    }

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """Initialize OpenAI client

        Args:
            api_key: OpenAI API key. If None, uses config.OPENAI_API_KEY
            model: Model name. If None, uses config.OPENAI_MODEL
        """
        self.api_key = api_key or config.OPENAI_API_KEY
        self.model = model or config.OPENAI_MODEL

        if not self.api_key:
            raise ValueError("OPENAI_API_KEY not set. Please check your .env file or config.")

        self.client = OpenAI(api_key=self.api_key)
        logger.info(f"OpenAI client initialized with model: {self.model}")

    def _is_reasoning_model(self) -> bool:
        """Check if current model is a reasoning model (no temperature/top_p support)"""
        return self.model.startswith(self._REASONING_PREFIXES)

    def _build_messages(
        self, prompt: str, system_prompt: Optional[str] = None
    ) -> list:
        """Build messages list with correct role for model type

        Reasoning models (gpt-5, o3, o4) use 'developer' role;
        standard models use 'system' role.
        """
        messages = []
        if system_prompt:
            role = "developer" if self._is_reasoning_model() else "system"
            messages.append({"role": role, "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages

    def _build_params(
        self,
        prompt: str,
        system_prompt: Optional[str],
        temperature: float,
        max_tokens: Optional[int],
        response_format: str,
        stream: bool,
        thinking_tokens: Optional[int] = None,
        **kwargs,
    ) -> Dict:
        """Assemble chat.completions.create() arguments for the current model"""
        if response_format not in RESPONSE_FORMATS:
            raise ValueError(f"Unknown response format: {response_format}")

        params = {
            "model": self.model,
            "messages": self._build_messages(prompt, system_prompt),
            **kwargs,
        }
        if stream:
            params["stream"] = True
        if RESPONSE_FORMATS[response_format]:
            params["response_format"] = RESPONSE_FORMATS[response_format]

        if self._is_reasoning_model():
            if thinking_tokens:
                # max_completion_tokens = output + reasoning budget
                params["reasoning_effort"] = self._effort_for_budget(thinking_tokens)
                if max_tokens is not None:
                    params["max_completion_tokens"] = max_tokens + thinking_tokens
            elif max_tokens is not None:
                params["max_completion_tokens"] = max_tokens
            params.pop("temperature", None)
            params.pop("top_p", None)
        else:
            if max_tokens is not None:
                params["max_tokens"] = max_tokens
            params["temperature"] = temperature

        return params

    @classmethod
    def _effort_for_budget(cls, thinking_tokens: int) -> str:
        for effort, budget in cls._REASONING_BUDGETS.items():
            if thinking_tokens <= budget:
                return effort
        return "high"

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        response_format: str = "text",
        thinking_tokens: Optional[int] = None,
        **kwargs
    ) -> str:
        """Generate text from a prompt

        Args:
            prompt: The user prompt
            system_prompt: System message to set context
            temperature: Sampling temperature (0-1 in the writing form)
            max_tokens: Maximum tokens in response
            response_format: "text" or "json" (JSON object mode)
            thinking_tokens: Reasoning budget; ignored for non-reasoning models
            **kwargs: Additional parameters for OpenAI API

        Returns:
            Generated text
        """
        params = self._build_params(
            prompt, system_prompt, temperature, max_tokens, response_format,
            stream=False, thinking_tokens=thinking_tokens, **kwargs
        )

        try:
            logger.debug(
                f"API call: model={self.model}, reasoning={self._is_reasoning_model()}, "
                f"format={response_format}, msgs={len(params['messages'])}"
            )
            response = self.client.chat.completions.create(**params)

            msg = response.choices[0].message
            refusal = getattr(msg, "refusal", None)
            if refusal:
                raise ValueError(f"Model refused request: {refusal}")

            content = msg.content
            if not content:
                diag = (
                    f"Empty response from {self.model} | "
                    f"finish_reason={response.choices[0].finish_reason}"
                )
                logger.error(diag)
                raise ValueError(diag)

            return content
        except Exception as e:
            logger.error(f"Error generating text: {e}")
            raise

    def generate_streaming(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        response_format: str = "text",
        thinking_tokens: Optional[int] = None,
        **kwargs
    ) -> Iterator[str]:
        """Generate text from a prompt with streaming

        Args:
            prompt: The user prompt
            system_prompt: System message to set context
            temperature: Sampling temperature
            max_tokens: Maximum tokens in response
            response_format: "text" or "json"
            thinking_tokens: Reasoning budget; ignored for non-reasoning models
            **kwargs: Additional parameters for OpenAI API

        Yields:
            Generated text chunks, in order
        """
        params = self._build_params(
            prompt, system_prompt, temperature, max_tokens, response_format,
            stream=True, thinking_tokens=thinking_tokens, **kwargs
        )

        try:
            with self.client.chat.completions.create(**params) as response:
                for chunk in response:
                    if chunk.choices and chunk.choices[0].delta.content:
                        yield chunk.choices[0].delta.content
        except Exception as e:
            logger.error(f"Error generating streaming text: {e}")
            raise


class AzureOpenAIClient(OpenAIClient):
    """Azure OpenAI client, same request handling as OpenAIClient"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,        # Azure deployment name
        azure_endpoint: Optional[str] = None,
        api_version: Optional[str] = None,
        base_model: Optional[str] = None,   # real model name, for reasoning detection
    ):
        # OpenAIClient.__init__ would build a plain OpenAI() client
        self.api_key = api_key or config.AZURE_OPENAI_API_KEY
        self.model = model or config.AZURE_OPENAI_DEPLOYMENT

        azure_endpoint = azure_endpoint or config.AZURE_OPENAI_ENDPOINT
        api_version = api_version or config.AZURE_OPENAI_API_VERSION

        if not self.api_key:
            raise ValueError("Azure OpenAI API key not set.")
        if not azure_endpoint:
            raise ValueError("Azure OpenAI endpoint not set.")
        if not self.model:
            raise ValueError("Azure OpenAI deployment name not set.")

        self._base_model = base_model or ""

        self.client = AzureOpenAI(
            api_key=self.api_key,
            azure_endpoint=azure_endpoint,
            api_version=api_version,
        )
        logger.info(
            f"Azure OpenAI client initialized: deployment={self.model}, "
            f"base_model={self._base_model or '(not set)'}, endpoint={azure_endpoint}"
        )

    def _is_reasoning_model(self) -> bool:
        """Use base_model when set; Azure deployment names are arbitrary"""
        check_name = self._base_model or self.model
        return check_name.startswith(self._REASONING_PREFIXES)


def get_llm_client(
    provider: str = "openai",
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    azure_endpoint: Optional[str] = None,
    api_version: Optional[str] = None,
    base_model: Optional[str] = None,
) -> LLMClient:
    """Get an LLM client instance

    Args:
        provider: LLM provider ('openai' or 'azure_openai')
        api_key: API key for the provider
        model: Model name (or Azure deployment name)
        azure_endpoint: Azure OpenAI endpoint URL
        api_version: Azure OpenAI API version
        base_model: Actual model name for reasoning detection (Azure only)

    Returns:
        LLMClient instance
    """
    if provider == "openai":
        return OpenAIClient(api_key=api_key, model=model)
    elif provider == "azure_openai":
        return AzureOpenAIClient(
            api_key=api_key,
            model=model,
            azure_endpoint=azure_endpoint,
            api_version=api_version,
            base_model=base_model,
        )
    else:
        raise ValueError(f"Unknown provider: {provider}")
