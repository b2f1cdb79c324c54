"""Exceptions raised by the masking engine."""
from __future__ import annotations


class MaskingError(Exception):
    """Base class for masking failures that are fatal to a request."""


class InvalidInputError(MaskingError, ValueError):
    """The payload is missing or blank."""


class PayloadParseError(MaskingError):
    """The payload cannot be parsed as the format its type implies."""

    def __init__(self, payload_type: str, message: str):
        super().__init__(f"Error masking {payload_type} payload: {message}")
        self.payload_type = payload_type


__all__ = ["MaskingError", "InvalidInputError", "PayloadParseError"]
