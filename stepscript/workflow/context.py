"""
Workflow Context

The shared state store threaded through every step of a sequencer run.
"""

from typing import Any, Callable, Optional


class WorkflowContext:
    """
    Mutable key/value bag passed by reference to each step.

    Provides:
    - Variable storage (get/set/remove)
    - Step result storage
    - Progress reporting
    - A cancellation flag checked by the sequencer between steps

    Values are never cleared implicitly; the context lives for one run.
    """

    def __init__(
        self,
        initial_values: Optional[dict[str, Any]] = None,
        progress_callback: Optional[Callable[[str, float], None]] = None,
    ):
        """
        Initialize the workflow context.

        Args:
            initial_values: Initial variable values
            progress_callback: Callback for progress updates (message, percent)
        """
        self._variables: dict[str, Any] = initial_values.copy() if initial_values else {}
        self._step_results: dict[str, Any] = {}
        self._progress_callback = progress_callback
        self._cancelled = False

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a variable value.

        Step results are not looked up here; use get_step_result() or the
        "<step_id>_result" key.

        Args:
            key: Variable name
            default: Default value if not found

        Returns:
            Variable value or default
        """
        return self._variables.get(key, default)

    def set(self, key: str, value: Any):
        """
        Set a variable value.

        Args:
            key: Variable name
            value: Value to store
        """
        self._variables[key] = value

    def remove(self, key: str) -> Any:
        """Remove a variable, returning its previous value (or None)."""
        return self._variables.pop(key, None)

    def contains(self, key: str) -> bool:
        """Check whether a variable is stored under key."""
        return key in self._variables

    def __contains__(self, key: str) -> bool:
        return self.contains(key)

    def set_step_result(self, step_id: str, result: Any):
        """
        Store the value computed by a step.

        Args:
            step_id: Step identifier
            result: Step result data
        """
        self._step_results[step_id] = result
        # Also store as {step_id}_result for lookup by later steps
        self._variables[f"{step_id}_result"] = result

    def get_step_result(self, step_id: str) -> Any:
        """Get the result of a previous step, or None."""
        return self._step_results.get(step_id)

    def get_all_variables(self) -> dict[str, Any]:
        """Get a copy of every stored variable."""
        return self._variables.copy()

    def report_progress(self, message: str, percent: float = -1):
        """
        Report progress to the callback.

        Args:
            message: Progress message
            percent: Progress percentage (0-100) or -1 for indeterminate
        """
        if self._progress_callback:
            self._progress_callback(message, percent)

    def cancel(self):
        """Request that the run stop before the next step starts."""
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        """Check if the run has been cancelled."""
        return self._cancelled

    def __repr__(self) -> str:
        return f"WorkflowContext({self.get_all_variables()!r})"
