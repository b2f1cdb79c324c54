"""Masking engine: detection, rule lookup and format processors."""

from .detector import PayloadType, XmlSubtypeInfo
from .engine import MaskingEngine, MaskResult
from .errors import InvalidInputError, MaskingError, PayloadParseError
from .processors import mask_value

__all__ = [
    "PayloadType",
    "XmlSubtypeInfo",
    "MaskingEngine",
    "MaskResult",
    "MaskingError",
    "InvalidInputError",
    "PayloadParseError",
    "mask_value",
]
