"""
Tests for the interactive create/rename prompt flows.
"""

import pytest

from blockvars.config import config
from blockvars.variables.prompts import (
    NamePromptSession,
    PromptState,
    create_variable_interactively,
    create_variable_session,
    normalize_name,
    rename_variable_interactively,
)
from blockvars.variables.registry import VariableRegistry


class ScriptedPrompt:
    """Answers prompts from a fixed script and records what was asked."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.asked = []

    def __call__(self, prompt_text, default_text):
        self.asked.append((prompt_text, default_text))
        return self.answers.pop(0)


class TestNormalizeName:
    """Test prompt response normalization."""

    def test_collapses_whitespace(self):
        """Whitespace runs collapse and the ends are stripped."""
        assert normalize_name("  my \t  var\n") == "my var"

    def test_non_breaking_space(self):
        """Non-breaking spaces count as whitespace."""
        assert normalize_name("a\xa0\xa0b") == "a b"

    def test_cancel(self):
        """None and empty answers give no name."""
        assert normalize_name(None) is None
        assert normalize_name("") is None
        assert normalize_name("   ") is None

    def test_reserved_labels(self):
        """The reserved button labels are treated as no name."""
        for label in config.naming.reserved_labels:
            assert normalize_name(label) is None
            assert normalize_name(f"  {label} ") is None

    def test_custom_reserved_labels(self):
        """Explicit reserved labels replace the configured ones."""
        assert normalize_name("new", reserved_labels=["new"]) is None
        assert normalize_name("Create variable...", reserved_labels=[]) == "Create variable..."


class TestCreateVariableInteractively:
    """Test the create flow."""

    def test_accepts_free_name(self):
        """A free name creates the variable."""
        registry = VariableRegistry()
        prompt = ScriptedPrompt("  total ")

        outcome = create_variable_interactively(registry, prompt, type="Number")

        assert outcome.accepted
        assert outcome.name == "total"
        assert outcome.record is registry.lookup(name="total", type="Number")
        assert prompt.asked == [(config.naming.new_variable_title, "")]

    def test_cancel_creates_nothing(self):
        """Cancelling is a terminal outcome with no mutation."""
        registry = VariableRegistry()
        outcome = create_variable_interactively(registry, ScriptedPrompt(None))

        assert outcome.state == PromptState.CANCELLED
        assert outcome.record is None
        assert len(registry.real) == 0

    def test_reserved_label_cancels(self):
        """Typing a reserved label is treated as giving no name."""
        registry = VariableRegistry()
        label = config.naming.reserved_labels[0]
        outcome = create_variable_interactively(registry, ScriptedPrompt(label))

        assert outcome.state == PromptState.CANCELLED
        assert len(registry.real) == 0

    def test_conflict_reprompts_with_typed_name(self):
        """A taken name alerts and re-prompts with that name as the default."""
        registry = VariableRegistry()
        registry.create(registry.real, "x", "")
        prompt = ScriptedPrompt("X", "y")
        alerts = []

        outcome = create_variable_interactively(registry, prompt, alert=alerts.append)

        assert outcome.accepted
        assert outcome.name == "y"
        assert outcome.attempts == 2
        assert [default for _, default in prompt.asked] == ["", "X"]
        assert alerts == ['A variable named "x" already exists.']

    def test_conflict_with_other_type_message(self):
        """A name taken by another type reports that type."""
        registry = VariableRegistry()
        registry.create(registry.real, "x", "Number")
        alerts = []

        outcome = create_variable_interactively(
            registry, ScriptedPrompt("x", None), type="String", alert=alerts.append
        )

        assert outcome.state == PromptState.CANCELLED
        assert alerts == ['A variable named "x" already exists for another type: "Number".']
        assert len(registry.real) == 1

    def test_repeated_conflicts(self):
        """The retry loop has no fixed limit."""
        registry = VariableRegistry()
        registry.create(registry.real, "x")
        outcome = create_variable_interactively(
            registry, ScriptedPrompt("x", "x", "x", "x", "free")
        )
        assert outcome.accepted
        assert outcome.attempts == 5


class TestRenameVariableInteractively:
    """Test the rename flow."""

    def test_rename(self):
        """A free name renames the record."""
        registry = VariableRegistry()
        record = registry.create(registry.real, "x", "Number")
        prompt = ScriptedPrompt("count")

        outcome = rename_variable_interactively(registry, record, prompt)

        assert outcome.accepted
        assert record.name == "count"
        assert prompt.asked[0][0] == 'Rename all "x" variables to:'

    def test_other_type_conflict(self):
        """A name used by another type is rejected and re-prompted."""
        registry = VariableRegistry()
        registry.create(registry.real, "y", "String")
        record = registry.create(registry.real, "x", "Number")
        alerts = []

        outcome = rename_variable_interactively(
            registry, record, ScriptedPrompt("Y", None), alert=alerts.append
        )

        assert outcome.state == PromptState.CANCELLED
        assert record.name == "x"
        assert alerts == ['A variable named "y" already exists for another type: "String".']

    def test_same_type_conflict(self):
        """A name used by the same type is rejected through the registry."""
        registry = VariableRegistry()
        registry.create(registry.real, "y", "Number")
        record = registry.create(registry.real, "x", "Number")
        alerts = []

        outcome = rename_variable_interactively(
            registry, record, ScriptedPrompt("y", "z"), alert=alerts.append
        )

        assert outcome.accepted
        assert record.name == "z"
        assert alerts == ['A variable named "y" already exists.']

    def test_cancel_leaves_name(self):
        """Cancelling a rename leaves the record untouched."""
        registry = VariableRegistry()
        record = registry.create(registry.real, "x")
        outcome = rename_variable_interactively(registry, record, ScriptedPrompt(None))
        assert outcome.state == PromptState.CANCELLED
        assert record.name == "x"


class TestNamePromptSession:
    """Test the session state machine step by step."""

    def test_step_by_step(self):
        """A caller can drive the session without callbacks."""
        registry = VariableRegistry()
        registry.create(registry.real, "x")
        session = create_variable_session(registry)

        assert session.request() == (config.naming.new_variable_title, "")
        assert session.respond("x") == PromptState.CONFLICT
        assert session.conflict.name == "x"

        session.acknowledge()
        assert session.request() == (config.naming.new_variable_title, "x")
        assert session.respond("w") == PromptState.ACCEPTED
        assert session.finished
        assert session.outcome().record.name == "w"

    def test_invalid_transitions(self):
        """Out-of-order calls are rejected."""
        session = NamePromptSession(
            prompt_text="?",
            find_conflict=lambda name: None,
            commit=lambda name: None,
            conflict_message=lambda name, existing: "",
        )
        with pytest.raises(RuntimeError):
            session.acknowledge()

        session.respond(None)
        with pytest.raises(RuntimeError):
            session.request()
        with pytest.raises(RuntimeError):
            session.respond("x")
