import logging
import math
from typing import AsyncIterator

from app.services.seed import seed_documents
from app.utils.serialization import dumps

logger = logging.getLogger(__name__)

# largest skip a find command can carry (BSON int64)
MAX_SKIP = 2 ** 63 - 1

PRICE_BOUNDARIES = [0, 50, 100, 200, 500, 1000, 2000]
OVERFLOW_BUCKET = "Other"

CATEGORY_STATS_PIPELINE = [
    {
        "$group": {
            "_id": "$category",
            "count": {"$sum": 1},
            "averagePrice": {"$avg": "$price"},
            "minPrice": {"$min": "$price"},
            "maxPrice": {"$max": "$price"},
            "totalStock": {"$sum": "$stock"},
        }
    },
    # categories with the same count come back alphabetically
    {"$sort": {"count": -1, "_id": 1}},
]

PRICE_RANGE_PIPELINE = [
    {
        "$bucket": {
            "groupBy": "$price",
            "boundaries": PRICE_BOUNDARIES,
            "default": OVERFLOW_BUCKET,
            "output": {
                "count": {"$sum": 1},
                "products": {"$push": "$name"},
                "averageStock": {"$avg": "$stock"},
            },
        }
    },
]


class StreamAborted(Exception):
    """A products stream failed after its first byte was sent. Already logged."""


class ProductService:
    """Operations on the products collection. Store errors propagate to the caller."""

    def __init__(self, collection):
        self.collection = collection

    async def init_products(self) -> list:
        """
        Replace the whole collection with the seed set.

        Not atomic: between the delete and the insert a concurrent reader sees
        an empty (or partially filled) collection.
        """
        deleted = await self.collection.delete_many({})
        logger.info(f"Removed {deleted.deleted_count} existing products")

        result = await self.collection.insert_many(seed_documents())
        logger.info(f"Initialized collection with {len(result.inserted_ids)} products")
        return list(result.inserted_ids)

    async def list_page(self, page: int, limit: int) -> dict:
        skip = (page - 1) * limit
        total = await self.collection.count_documents({})
        if skip > MAX_SKIP:
            docs = []
        else:
            docs = await self.collection.find({}, skip=skip, limit=limit).to_list(None)

        return {
            "data": docs,
            "pagination": {
                "currentPage": page,
                "limit": limit,
                "totalPages": math.ceil(total / limit),
                "totalProducts": total,
            },
        }

    async def filter_products(self, query: dict) -> list:
        return await self.collection.find(query).to_list(None)

    async def open_stream(self) -> AsyncIterator[str]:
        """
        Start a cursor over every product and return the JSON array body as an
        async iterator of text chunks.

        The first document is fetched here, before any byte is sent, so a
        failing query still surfaces as an exception to the route.
        """
        cursor = self.collection.find({})
        documents = aiter(cursor)
        first = await anext(documents, None)
        return self._json_array(cursor, documents, first)

    async def _json_array(self, cursor, documents, first) -> AsyncIterator[str]:
        exhausted = False
        try:
            yield "["
            if first is not None:
                yield dumps(first)
                async for doc in documents:
                    yield "," + dumps(doc)
            exhausted = True
            yield "]"
        except Exception as exc:
            # headers are already out, the status can't change anymore
            logger.exception("Error streaming products, aborting response")
            raise StreamAborted("products stream aborted") from exc
        finally:
            if not exhausted:
                logger.info("Products stream stopped early, closing cursor")
                await cursor.close()

    async def category_stats(self) -> list:
        return await self.collection.aggregate(CATEGORY_STATS_PIPELINE).to_list(None)

    async def price_ranges(self) -> list:
        return await self.collection.aggregate(PRICE_RANGE_PIPELINE).to_list(None)
