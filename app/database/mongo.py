import logging

from motor.motor_asyncio import AsyncIOMotorClient

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "products_demo"


class MongoStore:
    """
    Thin handle over a Motor client.

    Either pass a connection string, or an already built client (tests hand in
    an in-memory Motor-compatible client here).
    """

    def __init__(self, uri: str | None = None, db_name: str | None = None,
                 products_collection: str = "products", client=None):
        if client is None:
            if not uri:
                raise ValueError("MongoStore needs a connection string or a client")
            client = AsyncIOMotorClient(uri)
        self.client = client
        self.db_name = db_name
        self.products_collection = products_collection

    @property
    def db(self):
        if self.db_name:
            return self.client[self.db_name]
        return self.client.get_default_database(DEFAULT_DB_NAME)

    def collection(self, name: str):
        return self.db[name]

    @property
    def products(self):
        return self.collection(self.products_collection)

    async def connect(self):
        # Motor connects lazily, ping forces a round trip so a bad URI fails here
        await self.client.admin.command("ping")
        logger.info("Successfully connected to MongoDB (database: %s)", self.db.name)

    async def ping(self) -> bool:
        await self.client.admin.command("ping")
        return True

    def close(self):
        self.client.close()
        logger.info("MongoDB connection closed")


def store_from_settings(settings) -> MongoStore:
    return MongoStore(
        uri=settings.MONGO_URI,
        db_name=settings.MONGO_DB,
        products_collection=settings.PRODUCTS_COLLECTION,
    )
