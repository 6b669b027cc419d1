import json
from typing import Any

from bson import ObjectId
from fastapi.encoders import jsonable_encoder

BSON_ENCODERS = {ObjectId: str}


def to_jsonable(value: Any) -> Any:
    return jsonable_encoder(value, custom_encoder=BSON_ENCODERS)


def dumps(value: Any) -> str:
    return json.dumps(to_jsonable(value), separators=(",", ":"))
