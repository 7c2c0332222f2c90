"""
FastAPI application entry point.

Serves the key check API and, when the static directory exists, the
browser UI that posts to it.
"""

import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from src.api.exception_handlers import register_exception_handlers
from src.api.middleware.request_context import RequestContextMiddleware
from src.api.routes import health, keys
from src.shared.config import Settings, get_settings

logger = structlog.get_logger(__name__)

# API Version for X-API-Version header
API_VERSION = "1.0.0"


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Deployment settings. Loaded from the environment if omitted.

    Returns configured app with middleware, routers and static UI.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Gemini Pro Key Checker",
        description="""
Checks a batch of Gemini API keys for access to the Pro model.

Each key is probed with a two-token `generateContent` call. Results come back
in the order the keys were submitted:

```json
[
  {"key": "AIza...", "isPro": true},
  {"key": "AIza...", "isPro": false, "error": "API key not valid.", "statusCode": 400}
]
```

`statusCode` is `"N/A"` when Google could not be reached at all.
""",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware, version=API_VERSION)

    register_exception_handlers(app)

    app.include_router(keys.router, tags=["keys"])
    app.include_router(health.router, prefix="/api/v1", tags=["health"])

    # Mounted last so API routes take precedence over files
    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    else:
        logger.info("Static UI directory not found, serving API only", static_dir=str(settings.static_dir))

    return app


# Create the application instance
app = create_app()
