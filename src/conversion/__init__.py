"""
API de conversão markdown → slices.
"""

from .models import (
    ParseRequest,
    ParseResponse,
    SliceTypesResponse,
    InstructionsResponse,
)
from .router import router as conversion_router

__all__ = [
    "ParseRequest",
    "ParseResponse",
    "SliceTypesResponse",
    "InstructionsResponse",
    "conversion_router",
]
