import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, StreamingResponse
from pymongo.errors import PyMongoError

from app.api.deps import get_page_limits, get_product_service
from app.services.product_service import ProductService
from app.utils.params import build_product_filter, parse_limit, parse_page
from app.utils.serialization import to_jsonable

logger = logging.getLogger(__name__)

router = APIRouter()


class CursorStreamingResponse(StreamingResponse):
    """Closes the body generator (and with it the cursor) however the response ends."""

    async def __call__(self, scope, receive, send):
        try:
            await super().__call__(scope, receive, send)
        finally:
            await self.body_iterator.aclose()


def _store_error(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=500)


@router.post("/init-products", status_code=201)
async def init_products(service: ProductService = Depends(get_product_service)):
    try:
        inserted_ids = await service.init_products()
    except PyMongoError:
        logger.exception("Error initializing products")
        return _store_error("Failed to initialize products")

    return JSONResponse(
        to_jsonable({
            "message": f"Initialized collection with {len(inserted_ids)} products",
            "insertedIds": inserted_ids,
        }),
        status_code=201,
    )


@router.get("/products")
async def list_products(
    page: str | None = None,
    limit: str | None = None,
    limits: tuple[int, int] = Depends(get_page_limits),
    service: ProductService = Depends(get_product_service),
):
    default_limit, max_limit = limits
    page_number = parse_page(page)
    page_size = parse_limit(limit, default=default_limit, maximum=max_limit)

    try:
        result = await service.list_page(page_number, page_size)
    except PyMongoError:
        logger.exception("Error fetching products")
        return _store_error("Failed to fetch products")

    return JSONResponse(to_jsonable(result))


@router.get("/products/filter")
async def filter_products(
    category: str | None = None,
    min_price: str | None = Query(None, alias="minPrice"),
    max_price: str | None = Query(None, alias="maxPrice"),
    service: ProductService = Depends(get_product_service),
):
    query = build_product_filter(category, min_price, max_price)

    try:
        docs = await service.filter_products(query)
    except PyMongoError:
        logger.exception("Error filtering products")
        return _store_error("Failed to filter products")

    return JSONResponse(to_jsonable({"filter": query, "count": len(docs), "data": docs}))


@router.get("/products/stream")
async def stream_products(service: ProductService = Depends(get_product_service)):
    try:
        body = await service.open_stream()
    except PyMongoError:
        logger.exception("Error streaming products")
        return _store_error("Failed to stream products")

    return CursorStreamingResponse(body, media_type="application/json")


@router.get("/products/stats/by-category")
async def category_stats(service: ProductService = Depends(get_product_service)):
    try:
        stats = await service.category_stats()
    except PyMongoError:
        logger.exception("Error getting category statistics")
        return _store_error("Failed to get category statistics")

    return JSONResponse(to_jsonable({"categoryStats": stats}))


@router.get("/products/stats/price-ranges")
async def price_ranges(service: ProductService = Depends(get_product_service)):
    try:
        buckets = await service.price_ranges()
    except PyMongoError:
        logger.exception("Error getting price range distribution")
        return _store_error("Failed to get price range distribution")

    return JSONResponse(to_jsonable({"priceRangeDistribution": buckets}))
