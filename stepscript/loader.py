"""
Sequence Loader

Builds step chains from YAML definitions.

Example document:

    steps:
      - id: ask_name
        type: prompt
        title: Your name
        key: name
      - id: check_name
        type: conditional
        when: {key: name, not_empty: true}
        then: [greet]
      - id: greet
        type: block
        action: greet
        branch_only: true
"""

from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml

from .models.config import SequencerConfig
from .workflow.context import WorkflowContext
from .workflow.engine import ConfigurationError, Sequencer
from .workflow.steps import (
    BaseStep,
    BlockStep,
    ConditionalStep,
    PathSelectionStep,
    PromptStep,
)

STEP_TYPES = ("block", "conditional", "prompt", "path_selection")


class SequenceParseError(Exception):
    """Exception raised when a sequence definition cannot be parsed."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        location = f" in {source}" if source else ""
        super().__init__(f"{message}{location}")


def build_predicate(when: dict[str, Any]) -> Callable[[WorkflowContext], bool]:
    """
    Turn a `when` mapping into a predicate over the context.

    Supported forms:
        {key: k, not_empty: true}   value present and truthy
        {key: k, exists: true}      key present (any value)
        {key: k, equals: v}         value equal to v
    """
    key = when["key"]

    if "equals" in when:
        expected = when["equals"]
        return lambda context: context.get(key) == expected
    if when.get("exists"):
        return lambda context: context.contains(key)
    if when.get("not_empty"):
        return lambda context: bool(context.get(key))
    raise ValueError("expected one of 'equals', 'exists' or 'not_empty'")


class SequenceLoader:
    """
    Converts parsed YAML into a Sequencer.

    Block steps name their action; the loader resolves the name in the
    action registry passed at construction.
    """

    @classmethod
    def load(
        cls,
        path: Union[str, Path],
        actions: Optional[dict[str, Callable]] = None,
        **sequencer_kwargs,
    ) -> Sequencer:
        """
        Load a sequence definition file.

        Raises:
            SequenceParseError: If the file is missing or malformed
            ConfigurationError: If it names unknown actions or steps
        """
        path = Path(path)
        if not path.exists():
            raise SequenceParseError(f"File not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise SequenceParseError(f"Invalid YAML syntax: {e}", str(path))

        return cls(actions, str(path)).build(data, **sequencer_kwargs)

    @classmethod
    def loads(
        cls,
        yaml_str: str,
        actions: Optional[dict[str, Callable]] = None,
        source: str = "<string>",
        **sequencer_kwargs,
    ) -> Sequencer:
        """Parse a YAML string into a Sequencer."""
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise SequenceParseError(f"Invalid YAML syntax: {e}", source)

        return cls(actions, source).build(data, **sequencer_kwargs)

    def __init__(
        self,
        actions: Optional[dict[str, Callable]] = None,
        source: str = "<unknown>",
    ):
        self.actions = actions or {}
        self.source = source

    def _error(self, message: str) -> SequenceParseError:
        return SequenceParseError(message, self.source)

    def _require(self, data: dict, key: str, context: str) -> Any:
        if key not in data:
            raise self._error(f"Missing required field '{key}' in {context}")
        return data[key]

    def build(
        self,
        data: Any,
        presenter=None,
        config: Optional[SequencerConfig] = None,
        **sequencer_kwargs,
    ) -> Sequencer:
        """
        Build a Sequencer from a parsed document.

        Args:
            data: Mapping with a 'steps' list
            presenter: Presenter handed to the sequencer
            config: Sequencer settings
        """
        if data is None:
            raise self._error("Empty sequence definition")
        if not isinstance(data, dict):
            raise self._error("Sequence definition must be a mapping")

        step_defs = self._require(data, "steps", "root")
        if not isinstance(step_defs, list):
            raise self._error("'steps' must be a list")

        chain: list[BaseStep] = []
        branch_only: list[BaseStep] = []
        links: list[tuple[ConditionalStep, list[str]]] = []

        for index, step_def in enumerate(step_defs):
            if not isinstance(step_def, dict):
                raise self._error(f"Step #{index + 1} must be a mapping")
            step = self._create_step(step_def, links)
            if step_def.get("branch_only", False):
                branch_only.append(step)
            else:
                chain.append(step)

        for conditional, targets in links:
            for target in targets:
                conditional.add_predicated_step(str(target))

        return Sequencer(
            chain,
            presenter=presenter,
            branch_steps=branch_only,
            config=config,
            **sequencer_kwargs,
        )

    def _create_step(
        self,
        step_def: dict[str, Any],
        links: list[tuple[ConditionalStep, list[str]]],
    ) -> BaseStep:
        step_id = str(self._require(step_def, "id", "step"))
        step_type = self._require(step_def, "type", f"step '{step_id}'")
        name = step_def.get("name")
        context = f"step '{step_id}'"

        if step_type == "block":
            action_name = self._require(step_def, "action", context)
            action = self.actions.get(action_name)
            if action is None:
                raise ConfigurationError(
                    f"Step '{step_id}' uses unknown action '{action_name}'", step_id
                )
            return BlockStep(
                step_id,
                action,
                name=name,
                run_on_main_thread=bool(step_def.get("main_thread", False)),
            )

        if step_type == "conditional":
            when = self._require(step_def, "when", context)
            if not isinstance(when, dict) or "key" not in when:
                raise self._error(f"'when' in {context} needs a 'key'")
            try:
                predicate = build_predicate(when)
            except ValueError as e:
                raise self._error(f"Invalid 'when' in {context}: {e}")
            targets = step_def.get("then", [])
            if not isinstance(targets, list):
                raise self._error(f"'then' in {context} must be a list")
            step = ConditionalStep(
                step_id,
                predicate,
                name=name,
                run_on_main_thread=bool(step_def.get("main_thread", False)),
            )
            links.append((step, targets))
            return step

        if step_type == "prompt":
            return PromptStep(
                step_id,
                title=self._require(step_def, "title", context),
                output_key=self._require(step_def, "key", context),
                initial_value=step_def.get("initial", ""),
                prefill_from_context=bool(step_def.get("prefill", False)),
                error_if_cancelled=bool(step_def.get("error_if_cancelled", False)),
                name=name,
            )

        if step_type == "path_selection":
            file_types = step_def.get("file_types") or []
            if not isinstance(file_types, list):
                raise self._error(f"'file_types' in {context} must be a list")
            return PathSelectionStep(
                step_id,
                title=self._require(step_def, "title", context),
                output_key=self._require(step_def, "key", context),
                allowed_file_types=[str(t) for t in file_types],
                allow_directories=bool(step_def.get("allow_directories", False)),
                error_if_cancelled=bool(step_def.get("error_if_cancelled", False)),
                name=name,
            )

        raise self._error(
            f"Unknown step type '{step_type}' in {context}. "
            f"Supported types: {', '.join(STEP_TYPES)}"
        )
