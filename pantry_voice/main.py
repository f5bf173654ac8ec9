"""pantry-voice - voice command interpreter for a household food inventory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from pantry_voice.core.config import constants, settings
from pantry_voice.core.lexicon import get_lexicon
from pantry_voice.core.logging import configure_logfire, instrument_fastapi
from pantry_voice.interface.voice_router import router as voice_router


logger = logging.getLogger(__name__)


async def check_inventory_connectivity() -> None:
    """Verify the inventory API is reachable.

    The service still starts when it is not: queries then answer with the
    fixed apology until the inventory comes back.
    """
    try:
        async with httpx.AsyncClient(timeout=constants.API_TIMEOUT_SECONDS) as client:
            response = await client.get(f"{settings.inventory_api_url.rstrip('/')}/api/food-items")
        if response.is_success:
            logger.info("startup_validation", extra={"service": "inventory", "status": "ok"})
        else:
            logger.warning(
                "startup_validation",
                extra={"service": "inventory", "status": "unavailable", "status_code": response.status_code},
            )
    except httpx.HTTPError as e:
        logger.warning("startup_validation", extra={"service": "inventory", "status": "unavailable", "error": str(e)})


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Configure logging first so validation logs are captured
    configure_logfire()

    # Fail fast on a locale without tables
    get_lexicon(settings.speech_locale)

    await check_inventory_connectivity()
    yield


app = FastAPI(
    title="pantry-voice",
    description="Voice command interpreter for a household food inventory",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

# Register routers
app.include_router(voice_router)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=constants.HTTP_OK)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("pantry_voice.main:app", host=settings.api_host, port=settings.api_port)
