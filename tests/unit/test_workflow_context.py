"""
Unit tests for the shared state store.
"""

from unittest.mock import Mock

from stepscript.workflow.context import WorkflowContext


class TestWorkflowContext:
    """Tests for WorkflowContext class."""

    def test_init_empty(self):
        """Test creating an empty context."""
        ctx = WorkflowContext()
        assert ctx.get("nonexistent") is None
        assert ctx.get("nonexistent", "default") == "default"

    def test_init_copies_initial_values(self):
        """Initial values are copied, not aliased."""
        initial = {"key1": "value1"}
        ctx = WorkflowContext(initial_values=initial)
        ctx.set("key1", "changed")

        assert initial["key1"] == "value1"
        assert ctx.get("key1") == "changed"

    def test_set_overwrites_by_key(self):
        ctx = WorkflowContext()
        ctx.set("name", "Alice")
        ctx.set("name", "Bob")
        assert ctx.get("name") == "Bob"

    def test_contains_and_remove(self):
        ctx = WorkflowContext(initial_values={"path": "/tmp"})
        assert "path" in ctx
        assert ctx.remove("path") == "/tmp"
        assert "path" not in ctx
        assert ctx.remove("path") is None

    def test_contains_none_value(self):
        """A key holding None is still present."""
        ctx = WorkflowContext()
        ctx.set("empty", None)
        assert ctx.contains("empty")

    def test_step_results(self):
        """Test storing and retrieving step results."""
        ctx = WorkflowContext()
        ctx.set_step_result("step1", {"output": "data"})

        assert ctx.get_step_result("step1") == {"output": "data"}
        assert "step1" not in ctx
        assert ctx.get("step1_result") == {"output": "data"}

    def test_get_all_variables(self):
        ctx = WorkflowContext(initial_values={"var1": "a"})
        ctx.set("var2", "b")
        ctx.set_step_result("step1", "result1")

        all_vars = ctx.get_all_variables()
        assert all_vars["var1"] == "a"
        assert all_vars["var2"] == "b"
        assert all_vars["step1_result"] == "result1"
        assert "step1" not in all_vars

    def test_progress_callback(self):
        callback = Mock()
        ctx = WorkflowContext(progress_callback=callback)

        ctx.report_progress("Testing", 50.0)

        callback.assert_called_once_with("Testing", 50.0)

    def test_progress_without_callback(self):
        WorkflowContext().report_progress("ignored")

    def test_cancellation(self):
        ctx = WorkflowContext()
        assert not ctx.is_cancelled

        ctx.cancel()
        assert ctx.is_cancelled

    def test_set_wins_over_step_result_with_same_name(self):
        """A variable named like a step reads back what was last set."""
        ctx = WorkflowContext()
        ctx.set_step_result("name", "computed")
        ctx.set("name", "Alice")

        assert ctx.get("name") == "Alice"
        assert ctx.get_step_result("name") == "computed"

    def test_remove_hides_key_even_with_step_result(self):
        ctx = WorkflowContext()
        ctx.set_step_result("k", 1)
        ctx.set("k", 2)

        assert ctx.remove("k") == 2
        assert "k" not in ctx
        assert ctx.get("k") is None
        assert ctx.get("k_result") == 1
