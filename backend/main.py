from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import contacts
from core.config import settings
from core.database import engine, Base
from core.logging import configure_logging, get_logger
from core.middleware import RequestLoggingMiddleware, SlowRequestMiddleware
from core.errors import register_error_handlers
from core.validation import registry
import models  # noqa: F401  (registers tables on Base.metadata)
import schemas  # noqa: F401  (declares validation schemas)

# Initialize logging before anything else
configure_logging(
    level=settings.LOG_LEVEL,
    json_logs=settings.LOG_JSON,
    log_sql=settings.LOG_SQL,
)

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("startup", message="schemagate starting up", schemas=registry.names())

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("database_connected", message="Database tables initialized")

    yield

    log.info("shutdown", message="schemagate shutting down")
    await engine.dispose()
    log.debug("database_disposed", message="Database connections closed")


app = FastAPI(
    title="schemagate",
    description="Declarative validation and coercion of JSON request bodies",
    version="0.1.0",
    lifespan=lifespan,
)

register_error_handlers(app, debug=settings.APP_DEBUG)

# Middleware (order matters: last added = first executed)
app.add_middleware(SlowRequestMiddleware, slow_threshold_ms=1000)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(contacts.router, prefix="/api/contacts", tags=["contacts"])


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": "0.1.0", "schemas": registry.names()}


if __name__ == "__main__":
    import uvicorn

    log.info("server_config", host=settings.BACKEND_HOST, port=settings.BACKEND_PORT, debug=settings.APP_DEBUG)
    uvicorn.run(
        "main:app",
        host=settings.BACKEND_HOST,
        port=settings.BACKEND_PORT,
        reload=settings.APP_DEBUG,
        log_config=None,  # Logging is configured above
    )
