"""Response envelopes and small document helpers shared by every feature package."""

import re
from datetime import datetime
from typing import Any, Optional
from bson import ObjectId
from fastapi.responses import JSONResponse


def serialize_mongo_doc(doc):
    """
    Make a MongoDB document JSON-safe: ObjectIds become strings, datetimes
    ISO strings, and `_id` keys are renamed to `id`. Nested dicts and lists
    are handled recursively.
    """
    if not doc:
        return doc

    if isinstance(doc, list):
        return [serialize_mongo_doc(d) for d in doc]

    if isinstance(doc, dict):
        clean = {}
        for k, v in doc.items():
            if isinstance(v, ObjectId):
                clean[k] = str(v)
            elif isinstance(v, datetime):
                clean[k] = v.isoformat()
            elif isinstance(v, (dict, list)):
                clean[k] = serialize_mongo_doc(v)
            else:
                clean[k] = v
        if "_id" in clean:
            clean["id"] = clean.pop("_id")
        return clean

    return doc


def slugify(text: str, max_length: int = 50) -> str:
    """Lowercase, hyphenate whitespace, drop anything outside [a-z0-9-]."""
    slug = re.sub(r"\s+", "-", text.lower())
    slug = re.sub(r"[^a-z0-9\-]", "", slug)
    return slug[:max_length]


def paginated(key: str, items: list, total: int, limit: int, offset: int) -> dict:
    """Body of a paged list, e.g. {"products": [...], "total": 42, "limit": 20, "offset": 0}."""
    return {key: items, "total": total, "limit": limit, "offset": offset}


def success_response(
    data: Optional[Any] = None,
    message: str = "Success",
    code: int = 200,
) -> JSONResponse:
    """{"success": true, "message": ..., "data": ...}"""
    content = {"success": True, "message": message}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=code, content=content)


def error_response(
    message: str,
    code: int = 400,
    data: Optional[Any] = None,
) -> JSONResponse:
    """{"success": false, "error": {"code": ..., "message": ...}}"""
    content = {"success": False, "error": {"code": code, "message": message}}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=code, content=content)
