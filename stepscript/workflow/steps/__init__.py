"""
Workflow Steps

Individual step implementations for the sequencer.
"""

from .base import (
    ActionFailed,
    BaseStep,
    Cancelled,
    ExecutionContext,
    OutcomeKind,
    StepError,
    StepOutcome,
)
from .block_step import BlockStep
from .conditional_step import ConditionalStep
from .prompt_step import InputStep, PromptStep
from .path_selection_step import PathSelectionStep

__all__ = [
    "ActionFailed",
    "BaseStep",
    "Cancelled",
    "ExecutionContext",
    "OutcomeKind",
    "StepError",
    "StepOutcome",
    "BlockStep",
    "ConditionalStep",
    "InputStep",
    "PromptStep",
    "PathSelectionStep",
]
