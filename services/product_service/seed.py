import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Category, Product
from .repository import CategoryRepository, ProductRepository

logger = structlog.get_logger(__name__)

CATEGORIES = [
    ("ao-nam", "Áo Nam"),
    ("ao-nu", "Áo Nữ"),
    ("quan-nam", "Quần Nam"),
    ("quan-nu", "Quần Nữ"),
    ("vay-dam", "Váy & Đầm"),
]

SAMPLE_PRODUCTS = [
    {
        "name": "Áo thun nam basic",
        "price": 299000,
        "image": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=300&h=400&fit=crop",
        "category": "ao-nam",
        "description": "Áo thun nam chất liệu cotton 100%",
    },
    {
        "name": "Quần jean nữ skinny",
        "price": 599000,
        "image": "https://images.unsplash.com/photo-1541099649105-f69ad21f3246?w=300&h=400&fit=crop",
        "category": "quan-nu",
        "description": "Quần jean nữ form skinny thời trang",
    },
    {
        "name": "Váy midi hoa",
        "price": 450000,
        "image": "https://images.unsplash.com/photo-1595777457583-95e059d581b8?w=300&h=400&fit=crop",
        "category": "vay-dam",
        "description": "Váy midi họa tiết hoa xinh xắn",
    },
    {
        "name": "Áo sơ mi trắng",
        "price": 399000,
        "image": "https://images.unsplash.com/photo-1586790170083-2f9ceadc732d?w=300&h=400&fit=crop",
        "category": "ao-nu",
        "description": "Áo sơ mi trắng công sở thanh lịch",
    },
]


async def seed_catalog(db: AsyncSession) -> None:
    """Insert missing categories, and the sample products only when the table is empty."""
    for category_id, name in CATEGORIES:
        if await CategoryRepository.get_category_by_id(db, category_id) is None:
            db.add(Category(id=category_id, name=name))
    await db.commit()

    if await ProductRepository.count_products(db) == 0:
        db.add_all([Product(**data) for data in SAMPLE_PRODUCTS])
        await db.commit()
        logger.info("sample_products_seeded", count=len(SAMPLE_PRODUCTS))
