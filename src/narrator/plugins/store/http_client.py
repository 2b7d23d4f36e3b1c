import logging
from typing import Any, Dict, List, Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from narrator.core.config import settings
from narrator.core.errors import DataStoreError, DataStoreNotConfiguredError
from narrator.interfaces.store import StorePort

logger = logging.getLogger(__name__)

# 읽기 전용 요청만 재시도: 전송 오류 시 최대 3회, 지수 백오프 (최소 0.1초, 최대 2초)
read_retry_policy = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.1, min=0.1, max=2.0),
    retry=retry_if_exception_type(httpx.TransportError),
    reraise=True,
)


class DataStoreHTTPClient(StorePort):
    """PostgREST client holding one pooled httpx.AsyncClient for the app lifetime."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        service_key: Optional[str] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url if base_url is not None else settings.STORE_REST_URL
        self.service_key = (
            service_key if service_key is not None else settings.SUPABASE_SERVICE_ROLE
        )
        self.timeout = timeout
        self.client: Optional[httpx.AsyncClient] = None

    @property
    def configured(self) -> bool:
        return bool(self.base_url and self.service_key)

    def _get_client(self) -> httpx.AsyncClient:
        if not self.configured:
            raise DataStoreNotConfiguredError()
        if self.client is None:
            self.client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "apikey": self.service_key,
                    "Authorization": f"Bearer {self.service_key}",
                    "Content-Type": "application/json",
                    "Prefer": "return=representation",
                },
            )
        return self.client

    async def _request(
        self,
        method: str,
        resource: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        client = self._get_client()
        response = await client.request(
            method, f"/{resource}", params=params, json=json, headers=headers
        )
        if not response.is_success:
            logger.error(f"Store {method} /{resource} failed: {response.status_code}")
            raise DataStoreError(
                f"[Supabase {response.status_code}] {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        if not response.content:
            return []
        return response.json()

    @read_retry_policy
    async def select(
        self, resource: str, params: Optional[Dict[str, str]] = None
    ) -> List[Dict[str, Any]]:
        return await self._request("GET", resource, params=params)

    async def insert(
        self, resource: str, rows: List[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        return await self._request("POST", resource, json=rows)

    async def update(
        self, resource: str, filters: Dict[str, str], patch: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        return await self._request("PATCH", resource, params=filters, json=patch)

    async def upsert(
        self, resource: str, rows: List[Dict[str, Any]], on_conflict: str
    ) -> List[Dict[str, Any]]:
        return await self._request(
            "POST",
            resource,
            params={"on_conflict": on_conflict},
            json=rows,
            headers={"Prefer": "resolution=merge-duplicates,return=representation"},
        )

    async def check_health(self) -> bool:
        if not self.configured:
            return False
        try:
            resp = await self._get_client().get("/")
            return resp.status_code == 200
        except Exception:
            return False

    async def close(self) -> None:
        """Gracefully close the underlying HTTP client."""
        if self.client is not None:
            await self.client.aclose()
            self.client = None
