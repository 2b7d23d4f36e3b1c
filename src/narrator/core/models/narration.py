from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConversationTurn(BaseModel):
    """A history entry. Forwarded to the completion service exactly as received."""

    model_config = ConfigDict(extra="allow")

    role: Optional[str] = Field(None, description="system | user | assistant")
    # str or a list of Responses API input parts
    content: Any = Field(None, description="발화 내용")

    def as_input(self) -> Dict[str, Any]:
        """The turn as the caller sent it, extra keys included."""
        return self.model_dump(exclude_unset=True)


class NarrationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    history: List[ConversationTurn] = Field(default_factory=list)
    user_turn: str = Field("", alias="userTurn")
    mood: Optional[str] = Field("default", description="'default' means no mood")
    # 1..5; anything else is treated as 3 downstream
    drama: Any = 3

    @field_validator("history", mode="before")
    @classmethod
    def _none_history(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("user_turn", mode="before")
    @classmethod
    def _coerce_user_turn(cls, value: Any) -> Any:
        return "" if value is None else str(value)

    @field_validator("mood", mode="before")
    @classmethod
    def _coerce_mood(cls, value: Any) -> Any:
        return None if value is None else str(value)


class NarrationResponse(BaseModel):
    text: str
