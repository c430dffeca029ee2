"""Reviewboard FastAPI application.

Web server that processes registry commands synchronously via HTTP. Each
request is wrapped in the Reviewboard domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - default      → event_processing = "sync"  (projectors fire in UoW)
#   - "production" → event_processing = "async" (projectors fire via Engine)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from reviewboard.domain import reviewboard
from reviewboard.utils.logging import add_context, clear_context

reviewboard.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Reviewboard API",
    description="Fee-gated review registries",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the Reviewboard domain context and bind request log context."""
    if not request.url.path.startswith("/registries"):
        # Health check, docs, etc.
        return await call_next(request)

    add_context(
        path=request.url.path,
        principal=request.headers.get("x-principal-id"),
    )
    try:
        with reviewboard.domain_context():
            response = await call_next(request)
    finally:
        clear_context()
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from reviewboard.api import register_registry_exception_handlers, registry_router  # noqa: E402

app.include_router(registry_router)
register_exception_handlers(app)
register_registry_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "reviewboard": {"name": reviewboard.name},
            },
        }
    )
