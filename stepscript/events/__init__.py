"""Sequencer event bus."""

from .event_bus import (
    EventBus,
    ProgressEvent,
    SequencerEvent,
    SequencerFinishedEvent,
    StepFinishedEvent,
    StepStartedEvent,
)

__all__ = [
    "EventBus",
    "ProgressEvent",
    "SequencerEvent",
    "SequencerFinishedEvent",
    "StepFinishedEvent",
    "StepStartedEvent",
]
