"""LLM Module - embeddings for semantic retrieval and match greetings."""
from core.llm.interfaces import LLMProvider
from core.llm.openai_service import OpenAIService
from core.llm.system_prompts import fallback_greeting

__all__ = ['LLMProvider', 'OpenAIService', 'fallback_greeting']
