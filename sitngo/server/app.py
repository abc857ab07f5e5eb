"""
FastAPI Application Entry Point for Sit-and-Go.

This module creates and configures the FastAPI application with:
- HTTP routes for running a tournament table
- CORS middleware for development
- A scheduler factory that drives AI turns and stage delays
"""

import logging
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitngo import __version__
from sitngo.config import GameConfig
from sitngo.core.scheduler import Scheduler, AsyncioScheduler
from sitngo.server.routes import router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(
    config: Optional[GameConfig] = None,
    scheduler_factory: Optional[Callable[[], Scheduler]] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Table settings (default: read from SITNGO_* environment)
        scheduler_factory: Builds the scheduler for each new tournament
            (default: AsyncioScheduler on the server's event loop)

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Sit-and-Go Hold'em",
        description="Single-table Texas Hold'em tournament against AI seats",
        version=__version__,
    )

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = config or GameConfig.from_env()
    app.state.scheduler_factory = scheduler_factory or AsyncioScheduler
    app.state.game = None

    app.include_router(router)

    logger.info(
        f"Blinds {app.state.config.small_blind}/{app.state.config.big_blind}, "
        f"starting stack {app.state.config.starting_stack}"
    )
    return app


# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "sitngo.server.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
