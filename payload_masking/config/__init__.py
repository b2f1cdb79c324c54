"""Configuration helpers for the masking application."""

from .models import Config, MaskingAttribute, MaskingRule, NamespaceMapping
from .loader import load_config, create_engine

__all__ = [
    "Config",
    "MaskingAttribute",
    "MaskingRule",
    "NamespaceMapping",
    "load_config",
    "create_engine",
]
