"""FastAPI main application."""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ohhell import __version__
from ohhell.api.game_handler import game_handler
from ohhell.api.routes import game_error_handler, router
from ohhell.config import settings
from ohhell.models.errors import GameError

# Configure logging for the app (must be after imports but before app usage)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stdout,
)
logging.getLogger("ohhell").setLevel(settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Log the variant on startup and drop all games on shutdown."""
    rules = game_handler.registry.rules
    logger.info(
        "Oh Hell server starting: %d-%d players, trump rule %s, hook rule %s",
        rules.min_players,
        rules.max_players,
        rules.trump_rule.value,
        "on" if rules.enforce_hook_rule else "off",
    )

    yield

    logger.info("Shutting down with %d games in memory", len(game_handler.registry.sessions))
    game_handler.clear()


# Create FastAPI app
app = FastAPI(
    title="Oh Hell API",
    description="Bidding trick-taking card game engine with bot players",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url, "http://localhost:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(GameError, game_error_handler)

# Include routers
app.include_router(router)


@app.get("/")
async def root() -> dict[str, str]:
    """API info."""
    return {
        "message": "Oh Hell API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


def main() -> None:
    """Run the application."""
    uvicorn.run(
        "ohhell.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info",
    )


if __name__ == "__main__":
    main()
