import logging
from typing import Any, Dict, List, Optional

from narrator.core.errors import StoryboardValidationError, StoryNotFoundError
from narrator.core.sanitizer import sanitize
from narrator.interfaces.store import StorePort

logger = logging.getLogger(__name__)

STORIES = "stories"
COMMENTS = "story_comments"
REACTIONS = "story_reactions"
PROFILES = "profiles"

DEFAULT_AUTHOR = "Anon"
DEFAULT_STORY_DRAMA = 3
LIST_LIMIT = 20
NICKNAME_MAX_LENGTH = 40


def coerce_story_drama(drama: Any) -> int:
    """Stored drama must satisfy the 1..5 check constraint; anything else is 3."""
    try:
        level = float(drama)
    except (TypeError, ValueError):
        return DEFAULT_STORY_DRAMA
    if not level.is_integer() or not 1 <= level <= 5:
        return DEFAULT_STORY_DRAMA
    return int(level)


def coerce_reaction(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number == 1:
        return 1
    if number == -1:
        return -1
    return None


class StoryboardService:
    """Shared stories, comments, reactions and profiles on top of the REST store.

    Every user-supplied string that is stored for others to read goes through
    the sanitizer first.
    """

    def __init__(self, store: StorePort):
        self.store = store

    async def share_story(
        self,
        title: Optional[str],
        content: Optional[str],
        mood: Optional[str] = None,
        drama: Any = None,
        author: Optional[str] = None,
    ) -> Dict[str, Any]:
        if not title or not content:
            raise StoryboardValidationError("Missing title or content")

        row = {
            "title": sanitize(title),
            "mood": sanitize(mood or ""),
            "drama": coerce_story_drama(drama),
            "content": sanitize(content),
            "author": sanitize(author or DEFAULT_AUTHOR),
        }
        created = await self.store.insert(STORIES, [row])
        logger.info(f"Story shared: {created[0].get('id') if created else None}")
        return created[0] if created else row

    async def list_stories(self, limit: int = LIST_LIMIT) -> List[Dict[str, Any]]:
        return await self.store.select(
            STORIES,
            {"select": "*", "order": "created_at.desc", "limit": str(limit)},
        )

    async def react(
        self, story_id: Optional[str], value: Any, client_id: Optional[str] = None
    ) -> Dict[str, Any]:
        vote = coerce_reaction(value)
        if not story_id or vote is None:
            raise StoryboardValidationError("Invalid reaction")

        current = await self.store.select(
            STORIES, {"id": f"eq.{story_id}", "select": "likes,dislikes"}
        )
        if not current:
            raise StoryNotFoundError("Story not found")

        if client_id:
            patch = await self._record_vote(story_id, client_id, vote)
        else:
            # Read-increment-write; concurrent reactions can lose updates.
            likes = current[0].get("likes") or 0
            dislikes = current[0].get("dislikes") or 0
            patch = {"likes": likes + 1} if vote == 1 else {"dislikes": dislikes + 1}

        updated = await self.store.update(STORIES, {"id": f"eq.{story_id}"}, patch)
        return updated[0] if updated else {"id": story_id, **patch}

    async def _record_vote(
        self, story_id: str, client_id: str, vote: int
    ) -> Dict[str, int]:
        """One vote per (story, client): upsert it, then recount from the vote rows."""
        await self.store.upsert(
            REACTIONS,
            [{"story_id": story_id, "client_id": client_id, "value": vote}],
            on_conflict="story_id,client_id",
        )
        votes = await self.store.select(
            REACTIONS, {"story_id": f"eq.{story_id}", "select": "value"}
        )
        likes = sum(1 for v in votes if v.get("value") == 1)
        dislikes = sum(1 for v in votes if v.get("value") == -1)
        return {"likes": likes, "dislikes": dislikes}

    async def add_comment(
        self, story_id: Optional[str], body: Optional[str], handle: Optional[str] = None
    ) -> Dict[str, Any]:
        if not story_id or not body:
            raise StoryboardValidationError("Missing story_id or body")

        row = {
            "story_id": story_id,
            "handle": sanitize(handle or DEFAULT_AUTHOR),
            "body": sanitize(body),
        }
        created = await self.store.insert(COMMENTS, [row])
        return created[0] if created else row

    async def list_comments(self, story_id: Optional[str]) -> List[Dict[str, Any]]:
        if not story_id:
            raise StoryboardValidationError("Missing story_id")
        return await self.store.select(
            COMMENTS,
            {"story_id": f"eq.{story_id}", "select": "*", "order": "created_at.asc"},
        )

    async def get_profile(self, client_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if not client_id:
            raise StoryboardValidationError("Missing client_id")
        rows = await self.store.select(
            PROFILES, {"client_id": f"eq.{client_id}", "select": "*", "limit": "1"}
        )
        return rows[0] if rows else None

    async def save_profile(
        self, client_id: Optional[str], nickname: Optional[str]
    ) -> Dict[str, Any]:
        if not client_id or not nickname or not nickname.strip():
            raise StoryboardValidationError("Missing client_id or nickname")

        row = {
            "client_id": client_id,
            "nickname": sanitize(nickname.strip()[:NICKNAME_MAX_LENGTH]),
        }
        saved = await self.store.upsert(PROFILES, [row], on_conflict="client_id")
        return saved[0] if saved else row
