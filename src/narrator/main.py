import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from narrator.api.router import api_router
from narrator.core.config import settings
from narrator.core.engine.narration_engine import SERVER_FALLBACK_TEXT
from narrator.plugins.llm.adapter import ResponsesChatModel
from narrator.plugins.store.http_client import DataStoreHTTPClient

logging.basicConfig(
    level=settings.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

NARRATION_PATHS = {
    f"{settings.API_STR}/continue",
    f"{settings.API_STR}/narration/continue",
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    store = DataStoreHTTPClient()
    app.state.store = store
    llm = ResponsesChatModel()
    app.state.llm = llm

    if not store.configured:
        logger.warning("Supabase is not configured. Storyboard endpoints will fail.")
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set. Narration requests will fail.")

    logger.info(f"Server starting... http://localhost:{settings.PORT}/docs")
    yield

    await store.close()
    await llm.aclose()
    logger.info("Data store and completion clients closed.")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
    openapi_url=f"{settings.API_STR}/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_STR)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Every error body is an {"error": ...} envelope."""
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    content = {"error": "Invalid request body"}
    # Narration callers always read a text field
    if request.url.path in NARRATION_PATHS:
        content["text"] = SERVER_FALLBACK_TEXT
    return JSONResponse(status_code=400, content=content)


@app.get("/")
async def root() -> Dict[str, str]:
    return {"message": "Story Narrator service is running"}


def run() -> None:
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
