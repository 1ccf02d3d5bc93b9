from .setup import setup_observability, configure_logging
from .metrics import (
    shop_cache_requests_total,
    shop_product_mutations_total,
    shop_checksum_failures_total,
    shop_uploads_total,
    shop_orders_total,
    shop_news_fallback_total
)
