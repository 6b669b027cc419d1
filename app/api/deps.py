from fastapi import Request

from app.database.mongo import MongoStore
from app.services.product_service import ProductService


def get_store(request: Request) -> MongoStore:
    return request.app.state.store


def get_product_service(request: Request) -> ProductService:
    return ProductService(get_store(request).products)


def get_page_limits(request: Request) -> tuple[int, int]:
    settings = request.app.state.settings
    return settings.DEFAULT_PAGE_LIMIT, settings.MAX_PAGE_LIMIT
