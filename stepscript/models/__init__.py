"""Data models."""

from .config import SequencerConfig, CONFIG_VERSION

__all__ = ["SequencerConfig", "CONFIG_VERSION"]
