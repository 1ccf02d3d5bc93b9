from typing import Optional, Sequence

import structlog
from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

from shared.cache import RedisCache
from shared.observability.metrics import shop_product_mutations_total

from .models import Category, Product
from .repository import CategoryRepository, ProductRepository
from .schemas import ProductCreate, ProductResponse, ProductUpdate

logger = structlog.get_logger(__name__)

PRODUCTS_CACHE_KEY = "products:all"
DEFAULT_CACHE_TTL = 300

_product_list = TypeAdapter(list[ProductResponse])


def serialize_products(products: Sequence[Product]) -> bytes:
    """JSON bytes for a product listing. Cache writes and fresh reads both go through here."""
    return _product_list.dump_json(_product_list.validate_python(products, from_attributes=True))


class ProductService:

    @staticmethod
    async def list_products(
        db: AsyncSession, cache: RedisCache, ttl: int = DEFAULT_CACHE_TTL
    ) -> tuple[bytes, bool]:
        """
        Returns the serialized product list and whether it came from the cache.

        An unavailable cache is handled exactly like a miss.
        """
        lookup = await cache.get(PRODUCTS_CACHE_KEY)
        if lookup.hit:
            logger.info("products_listed", source="cache")
            return lookup.value, True

        products = await ProductRepository.get_all_products(db)
        payload = serialize_products(products)
        await cache.set(PRODUCTS_CACHE_KEY, payload, ttl)
        logger.info("products_listed", source="database", count=len(products), cache=lookup.status.value)
        return payload, False

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int) -> Optional[Product]:
        return await ProductRepository.get_product_by_id(db, product_id)

    @staticmethod
    async def list_categories(db: AsyncSession) -> Sequence[Category]:
        return await CategoryRepository.get_all_categories(db)

    @staticmethod
    async def create_product(db: AsyncSession, cache: RedisCache, data: ProductCreate) -> Product:
        product = Product(
            name=data.name,
            price=data.price,
            image=data.image,
            category=data.category,
            description=data.description,
        )
        product = await ProductRepository.create_product(db, product)
        await ProductService._invalidate(cache, "create", product.id)
        return product

    @staticmethod
    async def update_product(
        db: AsyncSession, cache: RedisCache, product_id: int, data: ProductUpdate
    ) -> Optional[Product]:
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            return None

        product.name = data.name
        product.price = data.price
        product.image = data.image
        product.category = data.category
        product.description = data.description
        product = await ProductRepository.update_product(db, product)
        await ProductService._invalidate(cache, "update", product.id)
        return product

    @staticmethod
    async def delete_product(db: AsyncSession, cache: RedisCache, product_id: int) -> Optional[Product]:
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            return None

        await ProductRepository.delete_product(db, product)
        await ProductService._invalidate(cache, "delete", product_id)
        return product

    @staticmethod
    async def _invalidate(cache: RedisCache, action: str, product_id: int) -> None:
        # Runs after commit; the next listing repopulates from the database.
        removed = await cache.delete(PRODUCTS_CACHE_KEY)
        shop_product_mutations_total.labels(action=action).inc()
        logger.info("product_cache_invalidated", action=action, product_id=product_id, cache_reachable=removed)
