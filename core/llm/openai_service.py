"""
OpenAI Service - LLM implementation using the OpenAI API.

Provides embedding generation for semantic retrieval and short greeting
messages for newly accepted matches.
"""
from typing import Any, Dict, List, Optional
import logging

import openai
from openai import OpenAI
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity import RetryCallState
from core.llm.interfaces import LLMProvider
from core.llm.system_prompts import GREETING_SYSTEM_PROMPT, greeting_user_message

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)

MAX_RETRY_AFTER_SECONDS = 60


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        "Transient OpenAI error (attempt %s). Waiting %.1fs before retry. Details: %s",
        retry_state.attempt_number, wait, exc,
    )


def _wait_respecting_retry_after(retry_state: RetryCallState) -> float:
    """Honour a Retry-After header on rate limits, otherwise back off exponentially."""
    exc = retry_state.outcome.exception()
    if isinstance(exc, openai.RateLimitError):
        try:
            retry_after = float(exc.response.headers.get("retry-after", "0"))
        except (AttributeError, ValueError):
            retry_after = 0.0
        if retry_after > 0:
            return min(retry_after, MAX_RETRY_AFTER_SECONDS)

    # 1 -> 2 -> 4 ... capped at 30s
    exp = wait_exponential(multiplier=1, min=1, max=30)
    return exp(retry_state)


def _llm_retry(attempts: int = 4):
    """Return a tenacity @retry decorator for LLM API calls."""
    return retry(
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        wait=_wait_respecting_retry_after,
        stop=stop_after_attempt(attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


class OpenAIService(LLMProvider):
    """
    OpenAI LLM Service.

    Embeddings use text-embedding-3-small at 1536 dimensions by default so
    they fit the vector columns on volunteer and vacancy.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_config: Optional[Dict[str, Any]] = None,
        client: Optional[OpenAI] = None
    ):
        if client is None:
            client_kwargs = {}
            if api_key:
                client_kwargs['api_key'] = api_key
            if base_url:
                client_kwargs['base_url'] = base_url
            client = OpenAI(**client_kwargs)
        self.client = client

        self.model_config = model_config or {}
        self.greeting_model = self.model_config.get('greeting_model', 'gpt-4o-mini')
        self.greeting_temperature = self.model_config.get('greeting_temperature', 0.7)
        self.embedding_model = self.model_config.get('embedding_model', 'text-embedding-3-small')
        self.embedding_dimensions = self.model_config.get('embedding_dimensions', 1536)
        self.max_input_chars = self.model_config.get('max_input_chars', 8000)

    @_llm_retry()
    def generate_embedding(self, text: str) -> List[float]:
        """Generate embedding vector for text (truncated to max_input_chars)."""
        text = (text or "")[:self.max_input_chars].strip()
        if not text:
            raise ValueError("Cannot embed empty text")

        response = self.client.embeddings.create(
            input=text,
            model=self.embedding_model,
            dimensions=self.embedding_dimensions
        )
        return response.data[0].embedding

    @_llm_retry(attempts=2)
    def generate_greeting(self, volunteer_name: str, vacancy_title: str, organisation_name: str) -> str:
        response = self.client.chat.completions.create(
            model=self.greeting_model,
            messages=[
                {"role": "system", "content": GREETING_SYSTEM_PROMPT},
                {"role": "user", "content": greeting_user_message(volunteer_name, vacancy_title, organisation_name)},
            ],
            temperature=self.greeting_temperature,
            max_tokens=100,
        )

        try:
            content = response.choices[0].message.content
        except (IndexError, AttributeError):
            logger.warning("Greeting response had no choices")
            return ""
        return (content or "").strip()
