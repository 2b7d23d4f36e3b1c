from typing import Any, Dict

from fastapi import APIRouter

from narrator.api.endpoints.storyboard import Service, to_http_error
from narrator.core.models.storyboard import ProfileInput

router = APIRouter()


@router.get("")
async def get_profile(service: Service, client_id: str = "") -> Dict[str, Any]:
    try:
        return {"profile": await service.get_profile(client_id)}
    except Exception as e:
        raise to_http_error(e) from e


@router.post("")
async def save_profile(body: ProfileInput, service: Service) -> Dict[str, Any]:
    try:
        profile = await service.save_profile(body.client_id, body.nickname)
        return {"ok": True, "profile": profile}
    except Exception as e:
        raise to_http_error(e) from e
