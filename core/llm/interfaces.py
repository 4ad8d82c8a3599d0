"""
LLM Provider Interface - Abstract base for AI service providers.

This module defines the interface for LLM services (OpenAI, Ollama, etc.).
"""
from abc import ABC, abstractmethod
from typing import List


class LLMProvider(ABC):
    """
    Abstract Interface for AI Service Providers.
    """

    @abstractmethod
    def generate_embedding(self, text: str) -> List[float]:
        """
        Generate a vector embedding for the given text.
        """
        pass

    @abstractmethod
    def generate_greeting(self, volunteer_name: str, vacancy_title: str, organisation_name: str) -> str:
        """
        Write a short opening line for a newly accepted match.

        Returns an empty string when the model produced nothing usable;
        callers substitute their own fallback.
        """
        pass
