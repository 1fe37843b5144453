"""
Configuration models for sequencer settings.

These models handle the config.json structure with migration support.
"""

from dataclasses import dataclass
from typing import Any, Dict


# Current config version - increment when schema changes
CONFIG_VERSION = 1


@dataclass
class SequencerConfig:
    """
    Main configuration data structure.

    Migration support: add new fields with defaults, never remove fields.
    """
    # Version for migration tracking
    _version: int = CONFIG_VERSION

    # Skip a step that an earlier branch already activated in the same run.
    # Off by default: two true branches targeting one step run it twice.
    deduplicate_branch_activations: bool = False

    # Trace every dispatched step
    debug_logging: bool = False

    # Publish lifecycle events on the EventBus
    use_event_bus: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "_version": self._version,
            "deduplicate_branch_activations": self.deduplicate_branch_activations,
            "debug_logging": self.debug_logging,
            "use_event_bus": self.use_event_bus,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SequencerConfig":
        """Create from dictionary, handling missing fields gracefully."""
        return cls(
            _version=data.get("_version", 0),
            deduplicate_branch_activations=bool(
                data.get("deduplicate_branch_activations", False)
            ),
            debug_logging=bool(data.get("debug_logging", False)),
            use_event_bus=bool(data.get("use_event_bus", False)),
        )
