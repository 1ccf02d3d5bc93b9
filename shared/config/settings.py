import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    user = os.getenv("POSTGRES_USER", "postgres")
    password = os.getenv("POSTGRES_PASSWORD", "postgres")
    host = os.getenv("POSTGRES_HOST", "localhost")  # In Docker, this will be 'postgres'
    port = os.getenv("POSTGRES_PORT", "5432")
    name = os.getenv("POSTGRES_DB", "shopquanao")
    return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{name}"


@dataclass
class Settings:
    database_url: str = field(default_factory=_database_url)
    sql_echo: bool = field(default_factory=lambda: _bool_env("SQL_ECHO", False))

    # Empty REDIS_URL disables the product cache entirely.
    redis_url: str = field(default_factory=lambda: os.getenv("REDIS_URL", "redis://localhost:6379/0"))
    product_cache_ttl: int = field(default_factory=lambda: int(os.getenv("PRODUCT_CACHE_TTL", "300")))

    minio_endpoint: str = field(default_factory=lambda: os.getenv("MINIO_ENDPOINT", "localhost:9000"))
    minio_access_key: str = field(default_factory=lambda: os.getenv("MINIO_ACCESS_KEY", "minioadmin"))
    minio_secret_key: str = field(default_factory=lambda: os.getenv("MINIO_SECRET_KEY", "minioadmin"))
    minio_bucket: str = field(default_factory=lambda: os.getenv("MINIO_BUCKET", "shopquanao"))
    minio_secure: bool = field(default_factory=lambda: _bool_env("MINIO_SECURE", False))
    minio_public_url: str = field(default_factory=lambda: os.getenv("MINIO_PUBLIC_URL", "http://localhost:9000"))

    news_api_url: str = field(default_factory=lambda: os.getenv("NEWS_API_URL", "https://newsapi.org/v2/everything"))
    news_api_key: str = field(default_factory=lambda: os.getenv("NEWS_API_KEY", "demo"))
    news_query: str = field(
        default_factory=lambda: os.getenv(
            "NEWS_QUERY",
            'thời trang OR fashion OR "quần áo" OR "áo thun" OR "váy đầm" OR streetwear',
        )
    )
    news_language: str = field(default_factory=lambda: os.getenv("NEWS_LANGUAGE", "vi"))
    news_timeout: float = field(default_factory=lambda: float(os.getenv("NEWS_TIMEOUT", "10")))

    api_prefix: str = field(default_factory=lambda: os.getenv("API_PREFIX", "/api"))
    cors_origins: list[str] = field(
        default_factory=lambda: [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    )
    otlp_endpoint: str | None = field(default_factory=lambda: os.getenv("OTLP_ENDPOINT") or None)


settings = Settings()
