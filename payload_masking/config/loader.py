"""Configuration loader for the masking application."""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from .models import Config, MaskingAttribute, MaskingRule, NamespaceMapping
from ..utils.io import read_yaml
from ..core.engine import MaskingEngine

logger = logging.getLogger(__name__)


def _parse_offset(rule_name: str, key: str, value: Any) -> int:
    # bool is an int subclass; a YAML ``yes`` is never a valid offset
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Rule {rule_name!r}: '{key}' must be an integer, got {value!r}")
    return value


def _parse_attribute(rule_name: str, raw: Any) -> MaskingAttribute:
    if not isinstance(raw, dict):
        raise ValueError(f"Rule {rule_name!r}: attribute must be a mapping, got {raw!r}")

    xpath = raw.get("xpath")
    jsonpath = raw.get("jsonpath")
    has_start = raw.get("start") is not None
    has_end = raw.get("end") is not None

    if has_start != has_end:
        raise ValueError(f"Rule {rule_name!r}: offset attributes need both 'start' and 'end'")

    variants = sum([bool(xpath), bool(jsonpath), has_start])
    if variants != 1:
        raise ValueError(
            f"Rule {rule_name!r}: attribute must define exactly one of "
            f"'xpath', 'jsonpath' or 'start'/'end', got {raw!r}"
        )

    if has_start:
        return MaskingAttribute(
            start=_parse_offset(rule_name, "start", raw["start"]),
            end=_parse_offset(rule_name, "end", raw["end"]),
        )
    if xpath:
        return MaskingAttribute(xpath=str(xpath))
    return MaskingAttribute(jsonpath=str(jsonpath))


def _parse_rules(raw_rules: List[Any]) -> List[MaskingRule]:
    rules: List[MaskingRule] = []
    for i, r in enumerate(raw_rules):
        if not isinstance(r, dict):
            raise ValueError(f"Rule #{i} must be a mapping, got {r!r}")
        type_key = str(r.get("type") or "").strip()
        name = type_key or f"#{i}"
        attrs = [_parse_attribute(name, a) for a in (r.get("attributes") or [])]
        rules.append(MaskingRule(type=type_key, attributes=attrs, service=r.get("service")))
    return rules


def _parse_namespace_mappings(raw_mappings: List[Any]) -> List[NamespaceMapping]:
    mappings: List[NamespaceMapping] = []
    for m in raw_mappings:
        pattern = m.get("pattern") if isinstance(m, dict) else m
        if not isinstance(pattern, str) or not pattern.strip():
            raise ValueError(f"Namespace mapping needs a non-empty 'pattern', got {m!r}")
        mappings.append(NamespaceMapping(pattern=pattern.strip()))
    return mappings


def parse_config(raw: Dict[str, Any]) -> Config:
    """Build a :class:`Config` from the parsed YAML document.

    The masking settings live under a top-level ``masking`` key; anything
    else in the document is ignored.
    """
    masking = raw.get("masking") or {}

    cfg = Config(
        namespace_mappings=_parse_namespace_mappings(masking.get("namespace_mappings") or []),
        rules=_parse_rules(masking.get("rules") or []),
    )
    logger.debug(
        "Parsed %d rules and %d namespace mappings",
        len(cfg.rules),
        len(cfg.namespace_mappings),
    )
    return cfg


def load_config(path: str) -> Config:
    """Load configuration from a YAML file.

    Parameters
    ----------
    path: str
        Path to the YAML configuration file.
    """
    return parse_config(read_yaml(path))


def create_engine(config_path: str) -> MaskingEngine:
    """Application factory creating a configured :class:`MaskingEngine`."""

    return MaskingEngine(load_config(config_path))


__all__ = ["parse_config", "load_config", "create_engine"]
