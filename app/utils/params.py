"""
Query-string parsing for the listing routes.

Everything arrives as a raw string. Bad input never raises: it falls back to
the default (page/limit) or is dropped (price bounds).
"""


def parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def parse_page(value: str | None, default: int = 1) -> int:
    page = parse_int(value)
    if page is None or page < 1:
        return default
    return page


def parse_limit(value: str | None, default: int = 5, maximum: int = 100) -> int:
    limit = parse_int(value)
    if limit is None or limit < 1:
        return default
    return min(limit, maximum)


def build_product_filter(category: str | None = None, min_price: str | None = None,
                         max_price: str | None = None) -> dict:
    query = {}
    if category:
        query["category"] = category

    low = parse_int(min_price)
    high = parse_int(max_price)
    if low is not None or high is not None:
        query["price"] = {}
        if low is not None:
            query["price"]["$gte"] = low
        if high is not None:
            query["price"]["$lte"] = high

    return query
