from typing import Annotated

from fastapi import Depends, Request

from narrator.core.engine.narration_engine import NarrationEngine
from narrator.interfaces.llm import LLMPort
from narrator.interfaces.store import StorePort
from narrator.services.storyboard import StoryboardService


def get_store(request: Request) -> StorePort:
    """Dependency to get the data store client from app state."""
    return request.app.state.store


def get_llm(request: Request) -> LLMPort:
    """Dependency to get the pooled completion service adapter from app state."""
    return request.app.state.llm


def get_narration_engine(
    llm: Annotated[LLMPort, Depends(get_llm)],
) -> NarrationEngine:
    """Dependency to get a configured NarrationEngine instance."""
    return NarrationEngine(llm=llm)


def get_storyboard_service(
    store: Annotated[StorePort, Depends(get_store)],
) -> StoryboardService:
    return StoryboardService(store)
