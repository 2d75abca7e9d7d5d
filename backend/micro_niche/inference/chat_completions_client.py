import logging
from typing import Dict, List, Optional

import requests

from micro_niche.errors import UpstreamError
from micro_niche.inference.base import LLMClient
from micro_niche.utils.json_extract import strip_fences

logger = logging.getLogger(__name__)


class ChatCompletionsClient(LLMClient):
    """
    Minimal client for an OpenAI-compatible /chat/completions endpoint.
    Always asks for a JSON object response. No retries.
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: str = "",
        temperature: float = 0.4,
        timeout: float = 45.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def generate(self, messages: List[Dict]) -> str:
        url = f"{self.base_url}/chat/completions"

        try:
            response = requests.post(
                url,
                headers=self._headers(),
                json={
                    "model": self.model,
                    "messages": messages,
                    "temperature": self.temperature,
                    "response_format": {"type": "json_object"},
                },
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.warning("LLM request to %s timed out after %ss", url, self.timeout)
            raise UpstreamError("Model request timed out") from e
        except requests.RequestException as e:
            logger.warning("LLM request to %s failed: %s", url, e)
            raise UpstreamError("Model request failed") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.ok:
            message = _error_message(data) or f"Model request failed: {response.status_code}"
            logger.warning("LLM returned %s: %s", response.status_code, message)
            raise UpstreamError(message)

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None

        if not content:
            raise UpstreamError("Model returned empty content")

        return strip_fences(content)


def _error_message(data) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict):
        return error.get("message")
    if isinstance(error, str):
        return error
    return None
