"""Format-specific masking strategies.

Every strategy redacts through :func:`mask_value`, so a masked span always
keeps the length of the original span.
"""
from __future__ import annotations

import enum
import json
import logging
import re
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional, Sequence

from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError
from jsonpath_ng.ext import parse as parse_jsonpath
from lxml import etree

from .detector import PayloadType
from .errors import PayloadParseError

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from ..config.models import MaskingAttribute

logger = logging.getLogger(__name__)

MASK_CHAR = "*"
VISIBLE_SUFFIX = 4
NAMESPACE_ALIAS = "ns"

ACCOUNT_NUMBER_RE = re.compile(r"[0-9]{10,14}")


# -----------------------------
# Primitive
# -----------------------------
def mask_value(value: str) -> str:
    """Mask all but the last four characters of ``value``.

    Values of four characters or fewer are returned unchanged.
    """
    if value is None or len(value) <= VISIBLE_SUFFIX:
        return value
    return MASK_CHAR * (len(value) - VISIBLE_SUFFIX) + value[-VISIBLE_SUFFIX:]


# -----------------------------
# XML
# -----------------------------
def _new_xml_parser() -> etree.XMLParser:
    # lxml parsers keep an error log, so each call gets its own.
    # The payload is always handed over as UTF-8 bytes, whatever it declares.
    return etree.XMLParser(
        encoding="utf-8", resolve_entities=False, no_network=True, huge_tree=False
    )


def _mask_xpath_result(item: Any) -> bool:
    if isinstance(item, etree._Element):
        if not isinstance(item.tag, str):
            # comment or processing instruction
            item.text = mask_value(item.text or "")
            return True
        text = "".join(item.itertext())
        for child in list(item):
            item.remove(child)
        item.text = mask_value(text)
        return True

    if isinstance(item, etree._ElementUnicodeResult):
        parent = item.getparent()
        if parent is None:
            return False
        masked = mask_value(str(item))
        if item.is_attribute:
            parent.set(item.attrname, masked)
        elif item.is_tail:
            parent.tail = masked
        else:
            parent.text = masked
        return True

    return False


def mask_xml(
    payload: str,
    attributes: Sequence["MaskingAttribute"],
    namespace_uri: Optional[str] = None,
) -> str:
    """Mask the nodes selected by each ``xpath`` attribute.

    When ``namespace_uri`` is given it is bound to the ``ns`` prefix so
    configured paths such as ``//ns:Acct/ns:Id`` resolve against it.
    """
    try:
        root = etree.fromstring(payload.strip().encode("utf-8"), parser=_new_xml_parser())
    except etree.XMLSyntaxError as e:
        raise PayloadParseError(PayloadType.XML.name, str(e)) from e

    namespaces: Optional[Dict[str, str]] = None
    if namespace_uri:
        namespaces = {NAMESPACE_ALIAS: namespace_uri}

    for attr in attributes:
        if not attr.is_xpath:
            continue
        try:
            result = root.xpath(attr.xpath, namespaces=namespaces)
        except etree.XPathError as e:
            logger.warning("Skipping XPath %r: %s", attr.xpath, e)
            continue

        if not isinstance(result, list) or not result:
            logger.debug("XPath %r matched no nodes", attr.xpath)
            continue

        for item in result:
            if not _mask_xpath_result(item):
                logger.debug("XPath %r selected a non-maskable value", attr.xpath)

    tree = root.getroottree()
    if payload.lstrip().startswith("<?xml"):
        return etree.tostring(tree, xml_declaration=True, encoding="UTF-8").decode("utf-8")
    return etree.tostring(tree, encoding="unicode")


# -----------------------------
# JSON
# -----------------------------
@lru_cache(maxsize=256)
def _compile_jsonpath(expr: str):
    return parse_jsonpath(expr)


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def mask_json(payload: str, attributes: Sequence["MaskingAttribute"]) -> str:
    """Mask the leaves selected by each ``jsonpath`` attribute."""
    try:
        document = json.loads(payload)
    except json.JSONDecodeError as e:
        raise PayloadParseError(PayloadType.JSON.name, str(e)) from e

    for attr in attributes:
        if not attr.is_jsonpath:
            continue
        try:
            expr = _compile_jsonpath(attr.jsonpath)
        except (JsonPathLexerError, JsonPathParserError) as e:
            logger.warning("Skipping JSONPath %r: %s", attr.jsonpath, e)
            continue

        matches = [m for m in expr.find(document) if m.value is not None]
        if not matches:
            logger.debug("JSONPath %r matched no values", attr.jsonpath)
            continue

        try:
            for match in matches:
                masked = mask_value(_stringify(match.value))
                document = match.full_path.update(document, masked)
        except (NotImplementedError, TypeError, AttributeError) as e:
            # extension paths such as `len` can be read but not written
            logger.warning("Skipping JSONPath %r: cannot write back (%s)", attr.jsonpath, e)
            continue

    return json.dumps(document, ensure_ascii=False, separators=(",", ":"))


# -----------------------------
# Fixed length
# -----------------------------
def mask_fixed_length(payload: str, attributes: Sequence["MaskingAttribute"]) -> str:
    """Mask the ``[start, end)`` ranges of each offset attribute.

    Ranges are read from the original payload; out-of-bounds ranges are
    skipped.
    """
    chars = list(payload)
    for attr in attributes:
        if not attr.is_offset:
            continue
        start, end = attr.start, attr.end
        if not (0 <= start < end <= len(payload)):
            logger.warning(
                "Skipping offset range [%d, %d) for payload of length %d",
                start,
                end,
                len(payload),
            )
            continue
        chars[start:end] = mask_value(payload[start:end])
    return "".join(chars)


# -----------------------------
# Default
# -----------------------------
def mask_default(payload: str, attributes: Optional[Sequence["MaskingAttribute"]] = None) -> str:
    """Mask every run of 10 to 14 consecutive digits.

    Used when no rules are configured for a payload type; ``attributes`` are
    ignored.
    """
    if not payload:
        return payload
    return ACCOUNT_NUMBER_RE.sub(lambda m: mask_value(m.group(0)), payload)


# -----------------------------
# Dispatch
# -----------------------------
class ProcessorKind(enum.Enum):
    XML = "xml"
    JSON = "json"
    FIXED_LENGTH = "fixed_length"
    DEFAULT = "default"


_FIXED_TYPES = frozenset(
    [PayloadType.MTSFTR, PayloadType.MTSADM, PayloadType.MFFIXED, PayloadType.FIXED]
)


def processor_kind(payload_type: PayloadType) -> ProcessorKind:
    """Return the processor family handling ``payload_type``."""
    if payload_type is PayloadType.XML:
        return ProcessorKind.XML
    if payload_type is PayloadType.JSON:
        return ProcessorKind.JSON
    if payload_type in _FIXED_TYPES:
        return ProcessorKind.FIXED_LENGTH
    raise ValueError(f"No processor for payload type {payload_type!r}")


_DISPATCH: Dict[ProcessorKind, Callable[[str, Sequence[Any], Optional[str]], str]] = {
    ProcessorKind.XML: mask_xml,
    ProcessorKind.JSON: lambda payload, attributes, _ns: mask_json(payload, attributes),
    ProcessorKind.FIXED_LENGTH: lambda payload, attributes, _ns: mask_fixed_length(payload, attributes),
    ProcessorKind.DEFAULT: lambda payload, attributes, _ns: mask_default(payload, attributes),
}


def apply_processor(
    kind: ProcessorKind,
    payload: str,
    attributes: Sequence["MaskingAttribute"],
    namespace_uri: Optional[str] = None,
) -> str:
    """Run the ``kind`` processor over ``payload``.

    Only the XML processor makes use of ``namespace_uri``.
    """
    return _DISPATCH[kind](payload, attributes, namespace_uri)


__all__: List[str] = [
    "mask_value",
    "mask_xml",
    "mask_json",
    "mask_fixed_length",
    "mask_default",
    "ProcessorKind",
    "processor_kind",
    "apply_processor",
]
