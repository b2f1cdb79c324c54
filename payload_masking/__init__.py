"""Top-level package for the payload masking service."""

from .config import Config
from .core import MaskingEngine, MaskResult, PayloadType

__all__ = ["Config", "MaskingEngine", "MaskResult", "PayloadType"]
