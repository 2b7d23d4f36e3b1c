import logging
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from narrator.core.deps import get_storyboard_service
from narrator.core.errors import StoryboardValidationError, StoryNotFoundError
from narrator.core.models.storyboard import (
    CommentInput,
    ReactionInput,
    ShareStoryInput,
)
from narrator.services.storyboard import StoryboardService

logger = logging.getLogger(__name__)

router = APIRouter()

Service = Annotated[StoryboardService, Depends(get_storyboard_service)]


def to_http_error(e: Exception) -> HTTPException:
    if isinstance(e, (StoryboardValidationError, StoryNotFoundError)):
        return HTTPException(status_code=e.status_code, detail=str(e))
    logger.error(f"Storyboard request failed: {e}")
    return HTTPException(status_code=500, detail=str(e))


@router.post("/share")
async def share_story(body: ShareStoryInput, service: Service) -> Dict[str, Any]:
    try:
        story = await service.share_story(
            title=body.title,
            content=body.content,
            mood=body.mood,
            drama=body.drama,
            author=body.author,
        )
        return {"ok": True, "story": story}
    except Exception as e:
        raise to_http_error(e) from e


@router.get("/list")
async def list_stories(service: Service) -> Dict[str, Any]:
    try:
        return {"stories": await service.list_stories()}
    except Exception as e:
        raise to_http_error(e) from e


@router.post("/react")
async def react(body: ReactionInput, service: Service) -> Dict[str, Any]:
    """Like (1) or dislike (-1) a story."""
    try:
        story = await service.react(body.story_id, body.value, body.client_id)
        return {"ok": True, "story": story}
    except Exception as e:
        raise to_http_error(e) from e


@router.post("/comment")
async def add_comment(body: CommentInput, service: Service) -> Dict[str, Any]:
    try:
        comment = await service.add_comment(body.story_id, body.body, body.handle)
        return {"ok": True, "comment": comment}
    except Exception as e:
        raise to_http_error(e) from e


@router.get("/comments")
async def list_comments(service: Service, story_id: str = "") -> Dict[str, Any]:
    try:
        return {"comments": await service.list_comments(story_id)}
    except Exception as e:
        raise to_http_error(e) from e
