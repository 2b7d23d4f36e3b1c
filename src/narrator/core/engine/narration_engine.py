import functools
import logging
from typing import Any, Callable, Dict, List, TypeVar, Union, cast

from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    ChatMessage,
    HumanMessage,
    SystemMessage,
)
from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from narrator.core.engine.style import (
    build_system_prompt,
    drama_temperature,
    normalize_drama,
    normalize_mood,
)
from narrator.core.models.context import NarrationContext
from narrator.core.models.narration import (
    ConversationTurn,
    NarrationRequest,
    NarrationResponse,
)
from narrator.core.sanitizer import sanitize
from narrator.interfaces.llm import INPUT_ITEM_KEY, LLMPort

logger = logging.getLogger(__name__)

MAX_OUTPUT_TOKENS = 220
FALLBACK_TEXT = "The narrator hesitates, then continues cautiously. (Fallback)"
SERVER_FALLBACK_TEXT = "(Server fallback)"

F = TypeVar("F", bound=Callable[..., Any])


def log_node_execution(func: F) -> F:
    """Decorator to log node execution."""

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        node_name = func.__name__
        logger.info(f"▶ START Node: [{node_name}]")
        try:
            result = await func(*args, **kwargs)
            logger.info(f"✔ END Node: [{node_name}]")
            if result:
                logger.info(f"   -> Updates: {list(result.keys())}")
            return result
        except Exception as e:
            logger.error(f"ERROR in Node [{node_name}]: {e}")
            raise e

    return cast(F, wrapper)


def _message_content(content: Any) -> Union[str, List[Union[str, Dict[str, Any]]]]:
    """LangChain-compatible view of a turn's content. The raw turn is sent upstream."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list) and all(isinstance(p, (str, dict)) for p in content):
        return content
    return str(content)


def to_message(turn: ConversationTurn) -> BaseMessage:
    """Map a history turn onto a LangChain message, keeping unknown roles verbatim.

    The turn itself rides along in ``additional_kwargs[INPUT_ITEM_KEY]`` so the
    adapter can forward it unchanged, extra keys and list content included.
    """
    content = _message_content(turn.content)
    extra = {INPUT_ITEM_KEY: turn.as_input()}
    if turn.role == "system":
        return SystemMessage(content=content, additional_kwargs=extra)
    if turn.role == "assistant":
        return AIMessage(content=content, additional_kwargs=extra)
    if turn.role == "user":
        return HumanMessage(content=content, additional_kwargs=extra)
    return ChatMessage(role=turn.role or "", content=content, additional_kwargs=extra)


class NarrationEngine:
    def __init__(self, llm: LLMPort):
        self.llm = llm
        self.graph: CompiledStateGraph = self._build_graph()

    async def narrate(self, request: NarrationRequest) -> NarrationResponse:
        initial_state: NarrationContext = {
            "history": request.history,
            "user_turn": request.user_turn,
            "mood": normalize_mood(request.mood),
            "drama": normalize_drama(request.drama),
        }

        final_state = await self.graph.ainvoke(initial_state)

        return NarrationResponse(text=final_state["text"])

    @log_node_execution
    async def build_prompt(self, state: NarrationContext) -> NarrationContext:
        """Compose the system instruction and the full message sequence."""
        system_prompt = build_system_prompt(state.get("mood"), state["drama"])

        messages: List[BaseMessage] = [SystemMessage(content=system_prompt)]
        messages.extend(to_message(turn) for turn in state.get("history", []))
        messages.append(HumanMessage(content=state.get("user_turn", "")))

        return {
            "messages": messages,
            "temperature": drama_temperature(state["drama"]),
        }

    @log_node_execution
    async def generate(self, state: NarrationContext) -> NarrationContext:
        """Single completion call. CompletionServiceError propagates to the caller."""
        logger.info(
            f"   -> drama={state['drama']} temperature={state['temperature']} "
            f"messages={len(state['messages'])}"
        )
        response_msg = await self.llm.ainvoke(
            state["messages"],
            temperature=state["temperature"],
            max_output_tokens=MAX_OUTPUT_TOKENS,
        )
        return {"raw_text": str(response_msg.content or "")}

    @log_node_execution
    async def finalize(self, state: NarrationContext) -> NarrationContext:
        """Apply the fallback sentence to empty output, then mask banned words."""
        text = state.get("raw_text", "")
        if not text.strip():
            logger.warning("Empty narration from completion service. Using fallback.")
            text = FALLBACK_TEXT
        return {"text": sanitize(text)}

    def _build_graph(self) -> CompiledStateGraph:
        workflow = StateGraph(NarrationContext)

        workflow.add_node("build_prompt", self.build_prompt)
        workflow.add_node("generate", self.generate)
        workflow.add_node("finalize", self.finalize)

        workflow.set_entry_point("build_prompt")

        workflow.add_edge("build_prompt", "generate")
        workflow.add_edge("generate", "finalize")
        workflow.add_edge("finalize", END)

        return workflow.compile()
