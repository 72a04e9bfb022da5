"""FastAPI application entry point."""

import logging
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from api.routes import game, players
from api.schemas import ErrorResponse
from config import config
from core.errors import (
    BlackjackError,
    ConcurrentModificationError,
    DecodeError,
    GameNotFoundError,
    InsufficientCardsError,
    InvalidGameStateError,
    InvalidInitialCardsError,
    InvalidPlayerNameError,
    PlayerAlreadyExistsError,
    PlayerNotFoundError,
)

logging.basicConfig(level=config.logging.level, format=config.logging.format)
logger = logging.getLogger(__name__)

# Status code and title for each domain error
ERROR_STATUS: dict[type[BlackjackError], tuple[int, str]] = {
    PlayerNotFoundError: (404, "Not Found"),
    GameNotFoundError: (404, "Not Found"),
    InvalidPlayerNameError: (400, "Invalid player name"),
    InsufficientCardsError: (400, "Insufficient Cards"),
    InvalidGameStateError: (400, "Invalid Game State"),
    PlayerAlreadyExistsError: (409, "Conflict"),
    ConcurrentModificationError: (409, "Conflict"),
    InvalidInitialCardsError: (500, "Internal Server Error"),
    DecodeError: (500, "Internal Server Error"),
}

# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    enabled=config.rate_limit.enabled,
    default_limits=[f"{config.rate_limit.requests_per_minute}/minute"],
)


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle rate limit exceeded errors."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


def _domain_error_handler(request: Request, exc: BlackjackError) -> JSONResponse:
    """Map a domain error onto its HTTP status."""
    status_code, title = ERROR_STATUS.get(type(exc), (500, "Internal Server Error"))
    if status_code >= 500:
        logger.error("Unexpected domain error on %s: %s", request.url.path, exc)
    body = ErrorResponse(
        timestamp=datetime.now(),
        status=status_code,
        error=title,
        message=str(exc),
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


app = FastAPI(
    title="Blackjack API",
    description="Single-player blackjack against an automated dealer",
    version="0.1.0",
)

# Add rate limiter to app state and exception handlers
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(BlackjackError, _domain_error_handler)

# CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors.allowed_origins,
    allow_credentials=config.cors.allow_credentials,
    allow_methods=config.cors.allow_methods,
    allow_headers=config.cors.allow_headers,
)


@app.get("/api/health")
@limiter.limit(f"{config.rate_limit.requests_per_minute}/minute")
async def health_check(request: Request) -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


# Include routers
app.include_router(game.router, prefix="/api/games", tags=["games"])
app.include_router(players.router, prefix="/api/players", tags=["players"])
