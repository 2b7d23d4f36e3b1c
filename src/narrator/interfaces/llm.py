from abc import ABC, abstractmethod

from langchain_core.language_models.chat_models import BaseChatModel

# additional_kwargs key carrying a caller-supplied input item to forward verbatim
INPUT_ITEM_KEY = "input_item"


class LLMPort(BaseChatModel, ABC):
    """Abstract base class for completion adapters, compatible with LangChain."""

    @abstractmethod
    async def check_health(self) -> bool:
        pass

    async def aclose(self) -> None:
        """Release pooled connections, if any."""
