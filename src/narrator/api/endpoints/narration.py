import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from narrator.core.deps import get_narration_engine
from narrator.core.engine.narration_engine import SERVER_FALLBACK_TEXT, NarrationEngine
from narrator.core.errors import CompletionServiceError
from narrator.core.models.narration import NarrationRequest, NarrationResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/continue", response_model=NarrationResponse)
@router.post(
    "/narration/continue",
    response_model=NarrationResponse,
    operation_id="narration_continue",
)
async def continue_story(
    request: NarrationRequest,
    engine: Annotated[NarrationEngine, Depends(get_narration_engine)],
) -> NarrationResponse:
    """Generate the narrator's next turn from the history, mood and drama level."""
    try:
        return await engine.narrate(request)
    except CompletionServiceError as e:
        raise HTTPException(
            status_code=500, detail={"error": f"OpenAI error: {e.body}"}
        ) from e
    except Exception as e:
        logger.error(f"Narration failed: {e}")
        raise HTTPException(
            status_code=500,
            detail={"error": "Server error", "text": SERVER_FALLBACK_TEXT},
        ) from e
