from typing import Any, Optional

from pydantic import BaseModel, Field

# Required fields are checked by StoryboardService, which raises a 400 naming
# the missing fields.


class ShareStoryInput(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    mood: Optional[str] = None
    drama: Any = None
    author: Optional[str] = None


class ReactionInput(BaseModel):
    story_id: Optional[str] = None
    value: Any = Field(None, description="1 (like) or -1 (dislike)")
    client_id: Optional[str] = Field(
        None, description="있으면 (story_id, client_id) 당 한 표로 upsert"
    )


class CommentInput(BaseModel):
    story_id: Optional[str] = None
    handle: Optional[str] = None
    body: Optional[str] = None


class ProfileInput(BaseModel):
    client_id: Optional[str] = None
    nickname: Optional[str] = None
