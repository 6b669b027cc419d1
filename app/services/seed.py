from app.models import Product

SEED_PRODUCTS: list[Product] = [
    Product(name="Laptop", price=1200, category="Electronics", stock=45),
    Product(name="Smartphone", price=800, category="Electronics", stock=120),
    Product(name="Headphones", price=100, category="Electronics", stock=78),
    Product(name="Monitor", price=300, category="Electronics", stock=35),
    Product(name="Desk", price=250, category="Furniture", stock=23),
    Product(name="Chair", price=150, category="Furniture", stock=50),
    Product(name="Bookshelf", price=180, category="Furniture", stock=15),
    Product(name="Coffee Table", price=120, category="Furniture", stock=8),
    Product(name="T-shirt", price=25, category="Clothing", stock=200),
    Product(name="Jeans", price=60, category="Clothing", stock=150),
    Product(name="Jacket", price=120, category="Clothing", stock=85),
    Product(name="Socks", price=10, category="Clothing", stock=300),
]


def seed_documents() -> list[dict]:
    """Fresh dicts on every call: the driver writes `_id` into what it inserts."""
    return [product.to_document() for product in SEED_PRODUCTS]
