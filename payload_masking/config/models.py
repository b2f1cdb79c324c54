"""Configuration models for the payload masking application."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..utils.io import read_yaml


@dataclass(frozen=True)
class NamespaceMapping:
    """Substring tested against the ``xmlns`` URIs of an XML root element."""

    pattern: str

    def matches(self, namespace_uri: str) -> bool:
        return self.pattern in namespace_uri

    @property
    def subtype(self) -> str:
        """Subtype identifier derived from the pattern (``pain.013`` -> ``xml_pain_013``)."""
        return "xml_" + self.pattern.replace(".", "_").lower()


@dataclass(frozen=True)
class MaskingAttribute:
    """A single maskable field.

    Exactly one variant is set: an XPath expression, a JSONPath expression,
    or a half-open ``[start, end)`` character range.
    """

    xpath: Optional[str] = None
    jsonpath: Optional[str] = None
    start: Optional[int] = None
    end: Optional[int] = None

    @property
    def is_xpath(self) -> bool:
        return self.xpath is not None

    @property
    def is_jsonpath(self) -> bool:
        return self.jsonpath is not None

    @property
    def is_offset(self) -> bool:
        return self.start is not None and self.end is not None


@dataclass(frozen=True)
class MaskingRule:
    """Attributes to mask for one payload type or XML subtype."""

    type: str
    attributes: List[MaskingAttribute] = field(default_factory=list)
    service: Optional[str] = None


@dataclass
class Config:
    """Runtime configuration for the masking engine."""

    namespace_mappings: List[NamespaceMapping] = field(default_factory=list)
    rules: List[MaskingRule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Config":
        """Build a configuration from an already parsed mapping."""
        from .loader import parse_config

        return parse_config(raw)

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """Load configuration from *path*."""
        return cls.from_dict(read_yaml(path))
