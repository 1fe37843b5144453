"""
stepscript

Step-sequencing engine for multi-stage interactive workflows: chains of
unit-of-work, conditional and input-collecting steps sharing one state bag,
with UI-thread dispatch for steps that touch the interface.
"""

from .loader import SequenceLoader, SequenceParseError
from .workflow import (
    ActionFailed,
    BaseStep,
    BlockStep,
    Cancelled,
    ConditionalStep,
    ConfigurationError,
    ExecutionContext,
    OutcomeKind,
    PathSelectionStep,
    PromptStep,
    SequenceBuilder,
    Sequencer,
    SequencerError,
    SequencerState,
    StepError,
    StepOutcome,
    WorkflowContext,
)

__version__ = "0.1.0"

__all__ = [
    "ActionFailed",
    "BaseStep",
    "BlockStep",
    "Cancelled",
    "ConditionalStep",
    "ConfigurationError",
    "ExecutionContext",
    "OutcomeKind",
    "PathSelectionStep",
    "PromptStep",
    "SequenceBuilder",
    "SequenceLoader",
    "SequenceParseError",
    "Sequencer",
    "SequencerError",
    "SequencerState",
    "StepError",
    "StepOutcome",
    "WorkflowContext",
]
