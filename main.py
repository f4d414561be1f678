"""
An N x N tic-tac-toe engine served to a browser front-end.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.router import include_routers
from app.core.config import settings
from app.core.exception_handlers import register_exception_handlers
from app.core.game_config import MIN_GRID_SIZE, MAX_GRID_SIZE, SEARCH_DEPTH_LIMIT

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.DEBUG else logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# Lifespan context manager for startup/shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application lifecycle events."""
    # Startup
    logger.info("Starting Tic Tac Toe engine ...")
    logger.info(f"Grids {MIN_GRID_SIZE}x{MIN_GRID_SIZE} to {MAX_GRID_SIZE}x{MAX_GRID_SIZE}, "
                f"search depth {SEARCH_DEPTH_LIMIT}, default difficulty {settings.DEFAULT_DIFFICULTY.value}, "
                f"thinking delay {'on' if settings.THINKING_DELAY_ENABLED else 'off'}")

    yield

    # Shutdown
    logger.info("Shutting down TicTacToe engine...")


# Create FastAPI application
app = FastAPI(
    title="TicTacToe",
    description="""
    Win detection and computer opponents (easy, medium, hard) for
    N x N tic-tac-toe with a configurable win length.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Register exception handlers
register_exception_handlers(app)


# Include routers
include_routers(app)

# CLI entry point
if __name__ == "__main__":
    import uvicorn

    # Development server configuration
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
        access_log=True
    )
