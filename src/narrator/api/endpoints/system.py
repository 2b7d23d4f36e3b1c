import asyncio
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from narrator.core.config import settings
from narrator.core.deps import get_llm, get_store
from narrator.interfaces.llm import LLMPort
from narrator.interfaces.store import StorePort

router = APIRouter()


@router.get("/health")
async def health() -> Dict[str, Any]:
    return {"ok": True, "hasKey": bool(settings.OPENAI_API_KEY)}


@router.get("/debug/env")
async def debug_env() -> Dict[str, Any]:
    """Which credentials are present. Never echoes secret values."""
    return {
        "hasOpenAI": bool(settings.OPENAI_API_KEY),
        "supabaseUrl": settings.SUPABASE_URL,
        "hasSupabaseRole": bool(settings.SUPABASE_SERVICE_ROLE),
    }


@router.get("/system/status")
async def check_system_status(
    llm: Annotated[LLMPort, Depends(get_llm)],
    store: Annotated[StorePort, Depends(get_store)],
) -> Dict[str, Any]:
    """
    Checks the health of the dependent services:
    - Completion service
    - Data store
    """
    results = {"completion_service": "unknown", "data_store": "unknown"}

    async def check_service(name: str, client: Any) -> None:
        try:
            is_healthy = await client.check_health()
            results[name] = "ok" if is_healthy else "error"
        except Exception as e:
            results[name] = f"error: {str(e)}"

    await asyncio.gather(
        check_service("completion_service", llm),
        check_service("data_store", store),
    )

    overall_status = "ok" if all(v == "ok" for v in results.values()) else "degraded"

    return {"status": overall_status, "services": results}
