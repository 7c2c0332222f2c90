"""
Run the key checker with uvicorn.

    python -m src.api
"""

import asyncio

import structlog
import uvicorn

from src.shared.config import get_settings
from src.shared.log_config import configure_logging

logger = structlog.get_logger(__name__)


async def main() -> None:
    """Run the API server."""
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.is_production)

    # Imported after logging is configured so module loggers pick it up
    from src.api.main import app

    logger.info(
        "Key checker starting",
        component="api",
        url=f"http://localhost:{settings.port}",
        model=settings.model_name,
    )

    config = uvicorn.Config(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    server = uvicorn.Server(config)
    await server.serve()


if __name__ == "__main__":
    asyncio.run(main())
