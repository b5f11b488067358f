from .helpers import (
    serialize_mongo_doc,
    success_response,
    error_response,
    paginated,
    slugify,
)
from .logger import Logger

__all__ = [
    "serialize_mongo_doc",
    "success_response",
    "error_response",
    "paginated",
    "slugify",
    "Logger",
]
