"""Utility helpers for I/O operations."""
from __future__ import annotations

from typing import Any, Dict

import yaml


def read_yaml(path: str) -> Dict[str, Any]:
    """Read a YAML file and return its content as a dictionary.

    An empty document yields ``{}``; a document whose top level is not a
    mapping is rejected.
    """
    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data


def read_text(path: str) -> str:
    """Return the content of a UTF-8 text file."""
    with open(path, "r", encoding="utf-8") as fh:
        return fh.read()


__all__ = ["read_yaml", "read_text"]
