from contextlib import asynccontextmanager

import httpx
import structlog
from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.cache import RedisCache, get_cache
from shared.config.database import AsyncSessionLocal, engine, get_db, init_db
from shared.config.settings import settings
from shared.errors import http_exception_handler, server_error, validation_exception_handler
from shared.observability import setup_observability
from shared.storage import ObjectStorage

# IMPORTANT: import models so they register with Base
from services.product_service import models as product_models  # noqa: F401
from services.order_service import models as order_models  # noqa: F401
from services.auth_service import models as auth_models  # noqa: F401

from services.product_service.router import router as product_router
from services.product_service.seed import seed_catalog
from services.order_service.router import router as order_router
from services.auth_service.router import router as auth_router
from services.upload_service.router import router as upload_router
from services.news_service.router import router as news_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Process-scoped resources; handlers reach them through dependencies only.
    try:
        await init_db(engine)
        async with AsyncSessionLocal() as session:
            await seed_catalog(session)
        logger.info("database_initialized")
    except Exception as e:
        logger.error("database_init_failed", error=str(e))

    app.state.cache = await RedisCache.connect(settings.redis_url)

    app.state.storage = ObjectStorage.from_settings(settings)
    try:
        await app.state.storage.ensure_bucket()
    except Exception as e:
        logger.error("object_storage_init_failed", error=str(e), bucket=settings.minio_bucket)

    app.state.news_client = httpx.AsyncClient(timeout=settings.news_timeout)

    yield

    await app.state.news_client.aclose()
    await app.state.cache.close()
    await engine.dispose()


app = FastAPI(
    title="Shop Quan Ao API",
    version="1.0.0",
    description="Clothing storefront: catalog, orders, accounts, image uploads and news.",
    docs_url="/api-docs",
    lifespan=lifespan,
)
app.state.settings = settings

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(app, "shop_storefront", settings.otlp_endpoint)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(product_router, prefix=settings.api_prefix)
app.include_router(order_router, prefix=settings.api_prefix)
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(upload_router, prefix=settings.api_prefix)
app.include_router(news_router, prefix=settings.api_prefix)


@app.get("/health", include_in_schema=False)
async def health_check(db: AsyncSession = Depends(get_db), cache: RedisCache = Depends(get_cache)):
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        raise server_error("Database connection failed", e)
    return {"status": "running", "database": "connected", "cache": cache.is_connected}
