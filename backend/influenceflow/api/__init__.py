from .api import build_api_router
from .errors import (
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler
)

__all__ = [
    "build_api_router",
    "http_exception_handler",
    "validation_exception_handler",
    "general_exception_handler"
]
