from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

# ============================================================
# 🪵 Logging Setup
# ============================================================
logging.basicConfig(
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(filename)s:%(lineno)d | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    level=logging.INFO,
)
logger = logging.getLogger("dataquery.app")

# ============================================================
# 📦 Core Imports
# ============================================================
from dataquery.config import Settings, load_settings
from dataquery.container import build_container
from dataquery.core.errors import EngineError, NotFoundError, ParseError

# ============================================================
# 🌐 Routers
# ============================================================
from dataquery.router.health import router as health_router
from dataquery.router.data_router import router as data_router
from dataquery.router.history_router import router as history_router
from dataquery.router.export_router import router as export_router

STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ParseError, 422),
)

def _status_for(exc: EngineError) -> int:
    for cls, code in STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR

async def engine_error_handler(request: Request, exc: EngineError) -> JSONResponse:
    code = _status_for(exc)
    log = logger.error if code >= 500 else logger.info
    log("%s %s failed [%s]: %s", request.method, request.url.path, exc.kind, exc.message)
    return JSONResponse(status_code=code, content={"error": exc.to_dict()})

async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": {"kind": "invalid_request", "message": str(exc)}},
    )

# ============================================================
# 🚀 App factory
# ============================================================
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("🚀 Initializing Data Query engine...")
        try:
            app.state.container = build_container(settings or load_settings())
        except Exception as e:
            logger.error(f"❌ Engine init failed: {e}", exc_info=True)
            raise
        logger.info("🎯 Engine is ready and accepting commands")
        try:
            yield
        finally:
            app.state.container = None
            logger.info("🧹 Application shutdown complete")

    app = FastAPI(
        title="Data Query Tool Engine",
        description="Folder ingestion, exact-match lookup, verification and query history",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(EngineError, engine_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)

    app.include_router(health_router)
    app.include_router(data_router)
    app.include_router(history_router)
    app.include_router(export_router)
    return app

app = create_app()

# ============================================================
# 🏁 Entrypoint
# ============================================================
def run() -> None:
    import uvicorn

    settings = load_settings()
    logging.getLogger().setLevel(settings.log_level.upper())
    logger.info(f"Starting Data Query engine on {settings.host}:{settings.port}...")
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        reload=False,
        log_config=None,
    )

if __name__ == "__main__":
    run()
