"""Payload type detection.

Classifies a raw payload into one of the :class:`PayloadType` members and,
for XML, derives an optional subtype from the root element's namespace
declarations. Subtype detection only scans the opening root tag; the full
document is parsed later by the XML processor, and only if masking rules
apply.
"""
from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .errors import InvalidInputError

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from ..config.models import NamespaceMapping


class PayloadType(enum.Enum):
    XML = "xml"
    JSON = "json"
    MTSFTR = "mtsftr"  # fixed length, starts with *FTR
    MTSADM = "mtsadm"  # fixed length, starts with *ADM
    MFFIXED = "mffixed"  # fixed length, starts with ACAI
    FIXED = "fixed"  # generic fixed length


FIXED_MARKERS = (
    ("*FTR", PayloadType.MTSFTR),
    ("*ADM", PayloadType.MTSADM),
    ("ACAI", PayloadType.MFFIXED),
)

# Optional declaration, comments, DOCTYPE and PIs, then the root start tag.
XML_ROOT_RE = re.compile(
    r"(?:<\?xml[^>]*\?>\s*)?"
    r"(?:(?:<!--.*?-->|<!DOCTYPE[^>]*>|<\?(?!xml[\s?])[^>]*\?>)\s*)*"
    r"<([A-Za-z_][^\s/>]*)([^>]*)>",
    re.DOTALL,
)
XMLNS_RE = re.compile(r"""\bxmlns(?::[^\s=]+)?\s*=\s*(["'])(.*?)\1""", re.DOTALL)


@dataclass(frozen=True)
class XmlSubtypeInfo:
    """Subtype and namespace detected for a single XML payload."""

    subtype: str
    namespace_uri: str


def detect_type(payload: Optional[str]) -> PayloadType:
    """Classify ``payload``; blank input raises :class:`InvalidInputError`."""
    if payload is None or not payload.strip():
        raise InvalidInputError("Payload cannot be null or empty")

    trimmed = payload.strip()

    if trimmed.startswith("<"):
        return PayloadType.XML

    if (trimmed.startswith("{") and trimmed.endswith("}")) or (
        trimmed.startswith("[") and trimmed.endswith("]")
    ):
        return PayloadType.JSON

    for marker, payload_type in FIXED_MARKERS:
        if trimmed.startswith(marker):
            return payload_type

    return PayloadType.FIXED


def _root_namespaces(payload: Optional[str]) -> Iterator[str]:
    if not payload:
        return
    m = XML_ROOT_RE.match(payload.strip())
    if not m:
        return
    for ns in XMLNS_RE.finditer(m.group(2)):
        yield ns.group(2)


def detect_xml_subtype_info(
    payload: Optional[str], mappings: Iterable["NamespaceMapping"]
) -> Optional[XmlSubtypeInfo]:
    """Return the subtype and the namespace URI that produced it.

    Namespaces are tried in declaration order and, for each of them, the
    mappings in configured order. Returns ``None`` when nothing matches or
    the root tag cannot be located.
    """
    mappings = [m for m in (mappings or []) if m.pattern]
    if not mappings:
        return None

    for namespace_uri in _root_namespaces(payload):
        for mapping in mappings:
            if mapping.matches(namespace_uri):
                return XmlSubtypeInfo(subtype=mapping.subtype, namespace_uri=namespace_uri)
    return None


def detect_xml_subtype(
    payload: Optional[str], mappings: Iterable["NamespaceMapping"]
) -> Optional[str]:
    """Return the subtype string (e.g. ``xml_pain_013``) or ``None``."""
    info = detect_xml_subtype_info(payload, mappings)
    return info.subtype if info else None


def extract_namespace(payload: Optional[str]) -> Optional[str]:
    """Return the first ``xmlns`` value declared on the root element."""
    return next(_root_namespaces(payload), None)


__all__ = [
    "PayloadType",
    "XmlSubtypeInfo",
    "detect_type",
    "detect_xml_subtype",
    "detect_xml_subtype_info",
    "extract_namespace",
]
