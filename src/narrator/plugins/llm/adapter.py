import json
import logging
from typing import Any, Dict, List, Optional

import httpx
from langchain_core.callbacks import CallbackManagerForLLMRun
from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    ChatMessage,
    HumanMessage,
    SystemMessage,
)
from langchain_core.outputs import ChatGeneration, ChatResult
from pydantic import Field, SecretStr

from narrator.core.config import settings
from narrator.core.errors import CompletionServiceError
from narrator.interfaces.llm import INPUT_ITEM_KEY, LLMPort

logger = logging.getLogger(__name__)


def extract_output_text(raw: str) -> Optional[str]:
    """
    Pull the generated text out of a Responses API body.

    Reads the top-level ``output_text`` first, then ``output[0].content[0].text``.
    Returns None when the body is not JSON or neither path holds text.
    """
    try:
        data = json.loads(raw)
    except ValueError:
        return None

    if not isinstance(data, dict):
        return None

    output_text = data.get("output_text")
    if isinstance(output_text, str) and output_text:
        return output_text

    try:
        nested = data["output"][0]["content"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if isinstance(nested, str) and nested:
        return nested
    return None


class ResponsesChatModel(LLMPort):
    """
    LangChain ChatModel adapter for the OpenAI Responses endpoint.
    One POST per generation; no retries.
    """

    base_url: str = Field(default_factory=lambda: settings.OPENAI_BASE_URL)
    api_key: Optional[SecretStr] = Field(
        default_factory=lambda: (
            SecretStr(settings.OPENAI_API_KEY) if settings.OPENAI_API_KEY else None
        )
    )
    model: str = Field(default_factory=lambda: settings.OPENAI_MODEL)
    timeout: float = Field(default_factory=lambda: settings.OPENAI_TIMEOUT)
    temperature: float = 0.7
    max_output_tokens: int = 220
    # Pooled for the adapter's lifetime; created on first use, released by aclose()
    client: Optional[httpx.AsyncClient] = Field(default=None, exclude=True)

    @property
    def _llm_type(self) -> str:
        return "openai_responses"

    @property
    def _identifying_params(self) -> Dict[str, Any]:
        return {"model": self.model, "base_url": self.base_url}

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key is not None:
            headers["Authorization"] = f"Bearer {self.api_key.get_secret_value()}"
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        if self.client is None:
            self.client = httpx.AsyncClient(
                base_url=self.base_url.rstrip("/"), timeout=self.timeout
            )
        return self.client

    def _convert_message(self, message: BaseMessage) -> Dict[str, Any]:
        """Converts a LangChain message to a Responses API input item."""
        input_item = message.additional_kwargs.get(INPUT_ITEM_KEY)
        if input_item is not None:
            return dict(input_item)

        role = "user"
        if isinstance(message, SystemMessage):
            role = "system"
        elif isinstance(message, AIMessage):
            role = "assistant"
        elif isinstance(message, HumanMessage):
            role = "user"
        elif isinstance(message, ChatMessage):
            role = message.role

        content = message.content
        if not isinstance(content, list):
            content = str(content)
        return {"role": role, "content": content}

    def _generate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Optional[CallbackManagerForLLMRun] = None,
        **kwargs: Any,
    ) -> ChatResult:
        raise NotImplementedError(
            "Sync generation not implemented. Use ainvoke/agenerate."
        )

    async def _agenerate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Optional[CallbackManagerForLLMRun] = None,
        **kwargs: Any,
    ) -> ChatResult:
        payload = {
            "model": self.model,
            "input": [self._convert_message(m) for m in messages],
            "max_output_tokens": kwargs.get(
                "max_output_tokens", self.max_output_tokens
            ),
            "temperature": kwargs.get("temperature", self.temperature),
        }

        response = await self._get_client().post(
            "/responses", json=payload, headers=self._headers()
        )

        raw = response.text
        if not response.is_success:
            logger.error(f"Completion service returned {response.status_code}")
            raise CompletionServiceError(response.status_code, raw)

        text = extract_output_text(raw)
        if text is None:
            logger.warning("Completion response had no output text")

        generation = ChatGeneration(
            message=AIMessage(content=text or ""),
            generation_info={"status_code": response.status_code},
        )
        return ChatResult(generations=[generation])

    async def check_health(self) -> bool:
        try:
            resp = await self._get_client().get(
                "/models", headers=self._headers(), timeout=3.0
            )
            return resp.status_code == 200
        except Exception:
            return False

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.aclose()
            self.client = None
