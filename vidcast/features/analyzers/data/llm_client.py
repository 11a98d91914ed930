import logging
from typing import Any, Dict, List, Optional

import requests

from vidcast.core.config.settings import settings
from ..domain.interfaces import ILLMClient

logger = logging.getLogger(__name__)


class OpenAICompatibleClient(ILLMClient):
    """
    Chat-completions client for any OpenAI-compatible endpoint.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        self.base_url = (base_url or settings.LLM_BASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.LLM_API_KEY
        self.model = model or settings.LLM_MODEL
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS
        self.http = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def complete(self, prompt: str, system: Optional[str] = None, max_tokens: Optional[int] = None) -> str:
        messages: List[Dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": 0.2,
        }
        if max_tokens:
            payload["max_tokens"] = max_tokens

        try:
            resp = self.http.post(
                f"{self.base_url}/chat/completions",
                json=payload,
                headers=self._headers(),
                timeout=float(self.timeout)
            )
        except requests.RequestException as e:
            raise RuntimeError(f"LLM request failed: {e}") from e

        if resp.status_code >= 400:
            raise RuntimeError(f"LLM request failed ({resp.status_code}): {resp.text[:500]}")

        data = resp.json() or {}
        content = (((data.get("choices") or [{}])[0].get("message") or {}).get("content") or "").strip()
        logger.debug(f"LLM returned {len(content)} chars from {self.model}")
        return content
