import logging
import os
from functools import lru_cache
from typing import Optional

from payload_masking.config import Config
from payload_masking.core import MaskingEngine

DEFAULT_CONFIG_PATH = "masking_config.yaml"
DEFAULT_LOG_LEVEL = "INFO"


@lru_cache()
def load_config(path: Optional[str] = None) -> Config:
    """Load the masking configuration.

    Parameters
    ----------
    path: Optional[str]
        Explicit path to the config file. If not provided, the
        ``MASKING_CONFIG_PATH`` environment variable is used. Defaults
        to ``masking_config.yaml``.
    """
    cfg_path = path or os.getenv("MASKING_CONFIG_PATH", DEFAULT_CONFIG_PATH)
    return Config.from_yaml(cfg_path)


@lru_cache()
def get_engine(path: Optional[str] = None) -> MaskingEngine:
    """Initialise and cache a :class:`MaskingEngine` instance."""

    cfg = load_config(path)
    return MaskingEngine(cfg)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging from ``level`` or ``MASKING_LOG_LEVEL``."""

    level = (level or os.getenv("MASKING_LOG_LEVEL", DEFAULT_LOG_LEVEL)).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
