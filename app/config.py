from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    MONGO_URI: str
    MONGO_DB: str | None = None
    PRODUCTS_COLLECTION: str = "products"

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    DEFAULT_PAGE_LIMIT: int = 5
    MAX_PAGE_LIMIT: int = 100

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
