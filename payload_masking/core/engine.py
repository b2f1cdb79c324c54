from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .detector import (
    PayloadType,
    detect_type,
    detect_xml_subtype_info,
)
from .processors import ProcessorKind, apply_processor, processor_kind
from .rules import RuleIndex

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from ..config.models import Config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaskResult:
    """Outcome of a single masking call."""

    masked_payload: str
    resolved_type_label: str
    payload_type: PayloadType


# -----------------------------
# Orchestrator
# -----------------------------
class MaskingEngine:
    """Facade detecting payload types and applying the configured rules.

    The engine holds only state built at construction time; everything
    derived from a payload stays local to the call that received it.
    """

    def __init__(self, cfg: Config):
        """Create a new instance bound to ``cfg``."""

        self.cfg = cfg
        self.namespace_mappings = tuple(cfg.namespace_mappings)
        self.rule_index = RuleIndex.from_rules(cfg.rules)
        logger.info("Built rule index with %d types", len(self.rule_index))

    def detect_type(self, payload: str) -> PayloadType:
        return detect_type(payload)

    def mask(self, payload: str) -> MaskResult:
        """Detect the type of ``payload`` and mask it.

        Raises :class:`InvalidInputError` for a blank payload and
        :class:`PayloadParseError` when the payload cannot be parsed.
        """

        detected = self.detect_type(payload)
        logger.info("Detected payload type: %s", detected.name)
        return self.mask_payload(payload, detected)

    def mask_payload(self, payload: str, detected_type: PayloadType) -> MaskResult:
        """Mask ``payload`` already classified as ``detected_type``."""

        namespace_uri: Optional[str] = None
        subtype: Optional[str] = None

        if detected_type is PayloadType.XML or payload.strip().startswith("<"):
            # bind the namespace that matched a mapping, not necessarily the
            # first declared one (e.g. xmlns:xsi often comes first)
            info = detect_xml_subtype_info(payload, self.namespace_mappings)
            if info is not None:
                subtype, namespace_uri = info.subtype, info.namespace_uri
                logger.info("Detected XML subtype: %s with namespace: %s", subtype, namespace_uri)

        type_key = subtype or detected_type.name
        attributes = self.rule_index.get(type_key)

        if not attributes:
            logger.warning(
                "No masking rules found for payload type: %s. "
                "Using default masking (10-14 consecutive digits).",
                type_key,
            )
            masked = apply_processor(ProcessorKind.DEFAULT, payload, ())
            return MaskResult(masked, detected_type.name, detected_type)

        kind = ProcessorKind.XML if subtype else processor_kind(detected_type)
        masked = apply_processor(kind, payload, attributes, namespace_uri)
        return MaskResult(masked, type_key, detected_type)


__all__ = ["MaskingEngine", "MaskResult"]
