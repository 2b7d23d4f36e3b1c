from typing import List, Optional, TypedDict

from langchain_core.messages import BaseMessage

from narrator.core.models.narration import ConversationTurn


class NarrationContext(TypedDict, total=False):
    """
    State carried through the narration graph.
    Each node returns only the keys it updates.
    """

    # --- Input ---
    history: List[ConversationTurn]
    user_turn: str
    mood: Optional[str]  # None means no mood override
    drama: str  # normalized level "1".."5"

    # --- Prompt ---
    messages: List[BaseMessage]
    temperature: float

    # --- Output ---
    raw_text: str
    text: str
