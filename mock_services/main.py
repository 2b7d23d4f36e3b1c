"""
Local stand-ins for the completion service and the PostgREST store.

    uvicorn mock_services.main:app --port 8090

then point the narrator at it:

    OPENAI_BASE_URL=http://localhost:8090/v1
    SUPABASE_URL=http://localhost:8090
    SUPABASE_SERVICE_ROLE=mock
"""

import itertools
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from pydantic import BaseModel

app = FastAPI(title="Narrator Mock Services")

# resource -> rows
TABLES: Dict[str, List[Dict[str, Any]]] = {
    "stories": [],
    "story_comments": [],
    "story_reactions": [],
    "profiles": [],
}

NARRATIONS = itertools.cycle(
    [
        "Dust drifts through a shaft of pale light as the hinges groan.",
        "Somewhere below, water drips in a slow, patient rhythm.",
        "A cold draft carries the smell of old parchment and smoke.",
    ]
)


# --- Schemas (Responses API subset) ---


class InputItem(BaseModel):
    role: str
    content: str


class ResponsesRequest(BaseModel):
    model: str
    input: List[InputItem]
    max_output_tokens: Optional[int] = None
    temperature: Optional[float] = None


# --- Completion service ---


@app.post("/v1/responses")
async def create_response(request: ResponsesRequest):
    print(
        f"[LLM] {len(request.input)} messages, temperature={request.temperature}, "
        f"max_output_tokens={request.max_output_tokens}"
    )
    text = next(NARRATIONS)
    return {
        "id": f"resp_{uuid.uuid4().hex[:12]}",
        "object": "response",
        "model": request.model,
        "output": [
            {
                "type": "message",
                "role": "assistant",
                "content": [{"type": "output_text", "text": text}],
            }
        ],
    }


@app.get("/v1/models")
async def list_models():
    return {"object": "list", "data": [{"id": "gpt-4o-mini", "object": "model"}]}


# --- PostgREST subset: eq.<value> filters, order=<col>.<asc|desc>, limit ---


def _filters(request: Request) -> Dict[str, str]:
    reserved = {"select", "order", "limit", "on_conflict"}
    return {
        key: value[3:]
        for key, value in request.query_params.items()
        if key not in reserved and value.startswith("eq.")
    }


def _matches(row: Dict[str, Any], filters: Dict[str, str]) -> bool:
    return all(str(row.get(key)) == value for key, value in filters.items())


def _project(row: Dict[str, Any], select: Optional[str]) -> Dict[str, Any]:
    if not select or select == "*":
        return dict(row)
    return {col: row.get(col) for col in select.split(",")}


def _new_row(resource: str, row: Dict[str, Any]) -> Dict[str, Any]:
    now = datetime.now(timezone.utc).isoformat()
    if resource == "stories":
        row = {"likes": 0, "dislikes": 0, **row}
    if resource == "profiles":
        row = {**row, "updated_at": now}
    return {"id": str(uuid.uuid4()), "created_at": now, **row}


@app.get("/rest/v1/")
async def store_root():
    return {"tables": list(TABLES)}


@app.get("/rest/v1/{resource}")
async def select_rows(resource: str, request: Request):
    rows = [r for r in TABLES.get(resource, []) if _matches(r, _filters(request))]

    order = request.query_params.get("order")
    if order:
        column, _, direction = order.partition(".")
        rows.sort(key=lambda r: str(r.get(column)), reverse=direction == "desc")

    limit = request.query_params.get("limit")
    if limit:
        rows = rows[: int(limit)]

    select = request.query_params.get("select")
    return [_project(r, select) for r in rows]


@app.post("/rest/v1/{resource}")
async def insert_rows(resource: str, request: Request):
    rows: List[Dict[str, Any]] = await request.json()
    table = TABLES.setdefault(resource, [])
    on_conflict = request.query_params.get("on_conflict")
    merge = "merge-duplicates" in request.headers.get("prefer", "")

    result = []
    for row in rows:
        existing = None
        if on_conflict and merge:
            keys = on_conflict.split(",")
            existing = next(
                (r for r in table if all(r.get(k) == row.get(k) for k in keys)), None
            )
        if existing is not None:
            existing.update(row)
            result.append(dict(existing))
        else:
            created = _new_row(resource, row)
            table.append(created)
            result.append(dict(created))

    print(f"[Store] {resource}: wrote {len(result)} row(s)")
    return result


@app.patch("/rest/v1/{resource}")
async def update_rows(resource: str, request: Request):
    patch: Dict[str, Any] = await request.json()
    filters = _filters(request)
    updated = []
    for row in TABLES.get(resource, []):
        if _matches(row, filters):
            row.update(patch)
            updated.append(dict(row))
    return updated


@app.get("/health")
async def health():
    return {"status": "ok"}
