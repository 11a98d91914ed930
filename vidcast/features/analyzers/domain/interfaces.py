from abc import ABC, abstractmethod
from typing import Optional


class ILLMClient(ABC):
    """
    Interface for the remote LLM completion service.
    Responses are free text that is expected, not guaranteed, to hold one JSON object.
    """

    @abstractmethod
    def complete(self, prompt: str, system: Optional[str] = None, max_tokens: Optional[int] = None) -> str:
        """
        Sends a single-turn prompt.

        Returns:
            The raw completion text (may be empty).

        Raises:
            RuntimeError: On transport failures or a non-2xx response.
        """
        pass
