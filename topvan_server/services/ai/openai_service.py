"""OpenAI service for AI-powered features.

Wraps the chat completions API behind a small interface so the rest of the
code (and the tests) never talk to the SDK directly.
"""
import logging
from typing import Optional, Dict, Any, List

from openai import OpenAI

logger = logging.getLogger(__name__)


class OpenAIService:
    """Service for interacting with OpenAI API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = 'gpt-4o-mini',
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
        client: Any = None,
    ):
        self._api_key = api_key
        self._default_model = model
        self._default_temperature = temperature
        self._timeout = timeout
        self._client = client

        if self._client is None and self._api_key:
            self._init_client()

    @classmethod
    def from_config(cls, settings) -> 'OpenAIService':
        return cls(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            temperature=settings.OPENAI_TEMPERATURE,
            timeout=settings.OPENAI_TIMEOUT,
        )

    def _init_client(self):
        """Initialize OpenAI client."""
        kwargs = {'api_key': self._api_key}
        if self._timeout:
            kwargs['timeout'] = self._timeout
        self._client = OpenAI(**kwargs)
        logger.info("OpenAI client initialized successfully")

    def is_configured(self) -> bool:
        """Check if OpenAI is properly configured."""
        return self._client is not None

    def query(
        self,
        prompt: str,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        system_prompt: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Send a single query to OpenAI.

        Args:
            prompt: The user's query
            model: Model to use (default from config)
            max_tokens: Maximum tokens in response
            temperature: Creativity (0-2)
            system_prompt: Optional system context

        Returns:
            Dict with content, model, usage, finish_reason
        """
        if not self.is_configured():
            raise ValueError("OpenAI is not configured")

        messages = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": prompt})

        return self._chat_completion(
            messages=messages,
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
        )

    def _chat_completion(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Internal method to call OpenAI chat completion API."""
        model = model or self._default_model
        if temperature is None:
            temperature = self._default_temperature

        kwargs = {
            "model": model,
            "messages": messages,
        }

        if max_tokens:
            kwargs["max_tokens"] = max_tokens
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            response = self._client.chat.completions.create(**kwargs)

            choice = response.choices[0]

            return {
                "content": choice.message.content,
                "model": response.model,
                "usage": {
                    "prompt_tokens": response.usage.prompt_tokens,
                    "completion_tokens": response.usage.completion_tokens,
                    "total_tokens": response.usage.total_tokens,
                } if response.usage else None,
                "finish_reason": choice.finish_reason,
            }
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise
