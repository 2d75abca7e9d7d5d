from abc import ABC, abstractmethod
from typing import Dict, List


class LLMClient(ABC):
    """
    One blocking chat call per generation.

    Implementations ask the provider for a single JSON object and return the
    assistant text with any markdown fences removed. Failures are raised as
    UpstreamError; parsing the JSON is left to the caller.
    """

    @abstractmethod
    def generate(self, messages: List[Dict[str, str]]) -> str:
        ...
