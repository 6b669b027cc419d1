import sys, os

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(ROOT)

from pymongo import MongoClient
from app.config import get_settings
from app.database.mongo import DEFAULT_DB_NAME
from app.services.seed import seed_documents


def seed_products():
    """Same reset as POST /api/init-products, for use without the API running."""
    settings = get_settings()
    client = MongoClient(settings.MONGO_URI)
    try:
        if settings.MONGO_DB:
            db = client[settings.MONGO_DB]
        else:
            db = client.get_default_database(DEFAULT_DB_NAME)
        collection = db[settings.PRODUCTS_COLLECTION]

        deleted = collection.delete_many({})
        print(f"Removed {deleted.deleted_count} existing products")

        result = collection.insert_many(seed_documents())
        print(f"Inserted {len(result.inserted_ids)} products into {db.name}.{collection.name}")
    finally:
        client.close()


if __name__ == "__main__":
    seed_products()
