from pathlib import Path

import pytest

from payload_masking.config import Config
from payload_masking.core import MaskingEngine

ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG = ROOT / "masking_config.yaml"


@pytest.fixture
def config_path() -> str:
    return str(DEFAULT_CONFIG)


@pytest.fixture
def engine(config_path) -> MaskingEngine:
    return MaskingEngine(Config.from_yaml(config_path))
