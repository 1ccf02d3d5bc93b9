import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from shared.cache import RedisCache, get_cache
from shared.config.database import get_db
from shared.errors import server_error

from .schemas import CategoryResponse, ProductCreate, ProductResponse, ProductUpdate
from .service import DEFAULT_CACHE_TTL, ProductService

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Products"])


def _cache_ttl(request: Request) -> int:
    settings = getattr(request.app.state, "settings", None)
    return settings.product_cache_ttl if settings else DEFAULT_CACHE_TTL


@router.get("/products", response_model=list[ProductResponse])
async def list_products(
    request: Request,
    db: AsyncSession = Depends(get_db),
    cache: RedisCache = Depends(get_cache),
):
    try:
        payload, cached = await ProductService.list_products(db, cache, _cache_ttl(request))
    except Exception as e:
        logger.error("list_products_failed", error=str(e))
        raise server_error("Failed to load products", e)
    return Response(
        content=payload,
        media_type="application/json",
        headers={"X-Cache": "HIT" if cached else "MISS"},
    )


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, db: AsyncSession = Depends(get_db)):
    try:
        product = await ProductService.get_product_by_id(db, product_id)
    except Exception as e:
        raise server_error("Failed to load product", e)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("/categories", response_model=list[CategoryResponse], tags=["Categories"])
async def list_categories(db: AsyncSession = Depends(get_db)):
    try:
        return await ProductService.list_categories(db)
    except Exception as e:
        raise server_error("Failed to load categories", e)


@router.post("/products", response_model=ProductResponse)
async def create_product(
    product: ProductCreate,
    db: AsyncSession = Depends(get_db),
    cache: RedisCache = Depends(get_cache),
):
    try:
        return await ProductService.create_product(db, cache, product)
    except Exception as e:
        logger.error("create_product_failed", error=str(e))
        raise server_error("Failed to create product", e)


@router.put("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    product: ProductUpdate,
    db: AsyncSession = Depends(get_db),
    cache: RedisCache = Depends(get_cache),
):
    try:
        updated = await ProductService.update_product(db, cache, product_id, product)
    except Exception as e:
        logger.error("update_product_failed", product_id=product_id, error=str(e))
        raise server_error("Failed to update product", e)
    if not updated:
        raise HTTPException(status_code=404, detail="Product not found")
    return updated


@router.delete("/products/{product_id}")
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db),
    cache: RedisCache = Depends(get_cache),
):
    try:
        deleted = await ProductService.delete_product(db, cache, product_id)
    except Exception as e:
        logger.error("delete_product_failed", product_id=product_id, error=str(e))
        raise server_error("Failed to delete product", e)
    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")
    return {"message": "Product deleted"}
