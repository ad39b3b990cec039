"""Configuration module for future-pytest."""

from future_pytest.config.models import FutureMatcherConfig
from future_pytest.config.loader import ConfigLoader

__all__ = ["FutureMatcherConfig", "ConfigLoader"]
