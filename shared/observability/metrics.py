from prometheus_client import Counter

# Business Metrics
shop_cache_requests_total = Counter(
    "shop_cache_requests_total",
    "Product cache operations by outcome",
    ["operation", "result"]  # Labels: result='hit', 'miss', 'unavailable', 'ok'
)

shop_product_mutations_total = Counter(
    "shop_product_mutations_total",
    "Product writes that invalidated the catalog cache",
    ["action"]  # Labels: 'create', 'update', 'delete'
)

shop_checksum_failures_total = Counter(
    "shop_checksum_failures_total",
    "Encoded uploads rejected because the checksum did not match"
)

shop_uploads_total = Counter(
    "shop_uploads_total",
    "Images stored in the object store",
    ["source"]  # Labels: 'multipart', 'base64'
)

shop_orders_total = Counter(
    "shop_orders_total",
    "Orders placed"
)

shop_news_fallback_total = Counter(
    "shop_news_fallback_total",
    "News requests answered with the static fallback payload"
)
