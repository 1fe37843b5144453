"""
Step Sequencer

Provides chained step execution with conditional fan-out and UI-thread
dispatch for interactive workflows.
"""

from .context import WorkflowContext
from .engine import (
    ConfigurationError,
    SequenceBuilder,
    Sequencer,
    SequencerError,
    SequencerState,
)
from .steps import (
    ActionFailed,
    BaseStep,
    BlockStep,
    Cancelled,
    ConditionalStep,
    ExecutionContext,
    InputStep,
    OutcomeKind,
    PathSelectionStep,
    PromptStep,
    StepError,
    StepOutcome,
)

__all__ = [
    # Context
    "WorkflowContext",
    # Engine
    "Sequencer",
    "SequenceBuilder",
    "SequencerState",
    "SequencerError",
    "ConfigurationError",
    # Steps
    "BaseStep",
    "StepOutcome",
    "OutcomeKind",
    "ExecutionContext",
    "StepError",
    "Cancelled",
    "ActionFailed",
    "BlockStep",
    "ConditionalStep",
    "InputStep",
    "PromptStep",
    "PathSelectionStep",
]
