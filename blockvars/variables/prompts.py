"""
Interactive name prompting for creating and renaming variables.

A prompt session is a small state machine:

    PROMPTING -> ACCEPTED             (name is free, variable committed)
    PROMPTING -> CANCELLED            (user cancelled or gave no usable name)
    PROMPTING -> CONFLICT -> PROMPTING (name taken; re-ask with it as default)

Cancellation is a terminal state, not an exception, and leaves the registry
untouched. The number of retries is not limited.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from blockvars.config import config
from blockvars.errors import NameTypeConflictError
from blockvars.logging import get_blockvars_logger
from blockvars.variables.models import VariableRecord
from blockvars.variables.registry import VariableRegistry

log = get_blockvars_logger("prompt")

# Shows prompt text with a default and returns the typed text, or None on cancel.
NamePrompt = Callable[[str, str], Optional[str]]
# Shows a conflict message; the session re-prompts once it returns.
Alert = Callable[[str], None]

_WHITESPACE_RUN = re.compile(r"[\s\xa0]+")


class PromptState(str, Enum):
    """States of a name prompt session."""

    PROMPTING = "prompting"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"
    CONFLICT = "conflict"


@dataclass
class PromptOutcome:
    """Final result of a prompt session."""

    state: PromptState
    name: Optional[str] = None
    record: Optional[VariableRecord] = None
    attempts: int = 0

    @property
    def accepted(self) -> bool:
        return self.state == PromptState.ACCEPTED


def normalize_name(
    text: Optional[str], reserved_labels: Optional[List[str]] = None
) -> Optional[str]:
    """
    Clean up a raw prompt response.

    Runs of whitespace collapse to a single space and leading and trailing
    whitespace is stripped. Beyond this all names are legal, except the
    reserved button labels, which count as no name at all.

    Args:
        text: Raw response, or None if the prompt was cancelled
        reserved_labels: Labels to reject (defaults to the configured ones)

    Returns:
        The normalized name, or None when there is no usable name
    """
    if not text:
        return None
    name = _WHITESPACE_RUN.sub(" ", text).strip()
    if reserved_labels is None:
        reserved_labels = config.naming.reserved_labels
    if not name or name in reserved_labels:
        return None
    return name


class NamePromptSession:
    """
    State machine for one create or rename attempt.

    The caller asks ``request()`` what to show, feeds the user's answer to
    ``respond()``, and on ``CONFLICT`` shows ``message`` and calls
    ``acknowledge()`` to go back to prompting. ``run()`` drives the whole
    loop with synchronous callbacks.
    """

    def __init__(
        self,
        prompt_text: str,
        find_conflict: Callable[[str], Optional[VariableRecord]],
        commit: Callable[[str], VariableRecord],
        conflict_message: Callable[[str, VariableRecord], str],
        reserved_labels: Optional[List[str]] = None,
    ):
        """
        Initialize the session.

        Args:
            prompt_text: Text shown above the input field
            find_conflict: Returns the record blocking a name, or None
            commit: Creates or renames the variable once a name is accepted
            conflict_message: Builds the alert text for a blocked name
            reserved_labels: Labels never accepted as names
        """
        self.prompt_text = prompt_text
        self.find_conflict = find_conflict
        self.commit = commit
        self.conflict_message = conflict_message
        self.reserved_labels = reserved_labels

        self.state = PromptState.PROMPTING
        self.default_text = ""
        self.message = ""
        self.conflict: Optional[VariableRecord] = None
        self.record: Optional[VariableRecord] = None
        self.name: Optional[str] = None
        self.attempts = 0

    @property
    def finished(self) -> bool:
        return self.state in (PromptState.ACCEPTED, PromptState.CANCELLED)

    def request(self) -> tuple:
        """Return ``(prompt_text, default_text)`` for the next prompt."""
        if self.state != PromptState.PROMPTING:
            raise RuntimeError(f"Cannot prompt in state {self.state.value}")
        return self.prompt_text, self.default_text

    def respond(self, response: Optional[str]) -> PromptState:
        """
        Feed one prompt response into the session.

        Args:
            response: Raw text typed by the user, or None on cancel

        Returns:
            The new state
        """
        if self.state != PromptState.PROMPTING:
            raise RuntimeError(f"Cannot respond in state {self.state.value}")
        self.attempts += 1

        name = normalize_name(response, self.reserved_labels)
        if name is None:
            log.debug(f"Prompt cancelled after {self.attempts} attempt(s)")
            self.state = PromptState.CANCELLED
            return self.state

        existing = self.find_conflict(name)
        if existing is None:
            try:
                self.record = self.commit(name)
            except NameTypeConflictError as exc:
                existing = exc.existing
            else:
                self.name = name
                self.state = PromptState.ACCEPTED
                log.debug(f'Prompt accepted "{name}"')
                return self.state

        self.conflict = existing
        self.message = self.conflict_message(name, existing)
        self.default_text = name
        self.state = PromptState.CONFLICT
        log.info(self.message)
        return self.state

    def acknowledge(self) -> None:
        """Leave ``CONFLICT`` and prompt again with the rejected name as default."""
        if self.state != PromptState.CONFLICT:
            raise RuntimeError(f"Nothing to acknowledge in state {self.state.value}")
        self.state = PromptState.PROMPTING

    def outcome(self) -> PromptOutcome:
        return PromptOutcome(
            state=self.state, name=self.name, record=self.record, attempts=self.attempts
        )

    def run(self, prompt: NamePrompt, alert: Optional[Alert] = None) -> PromptOutcome:
        """
        Drive the session to a terminal state.

        Args:
            prompt: Shows a prompt and returns the response
            alert: Shows a conflict message (optional)

        Returns:
            The final outcome
        """
        while not self.finished:
            if self.state == PromptState.CONFLICT:
                if alert is not None:
                    alert(self.message)
                self.acknowledge()
            self.respond(prompt(*self.request()))
        return self.outcome()


def _format_conflict(name: str, existing: VariableRecord, type: str) -> str:
    naming = config.naming
    if existing.type == type:
        return naming.already_exists.replace("%1", name.lower())
    return naming.already_exists_for_another_type.replace("%1", name.lower()).replace(
        "%2", existing.type
    )


def create_variable_session(
    registry: VariableRegistry, type: str = ""
) -> NamePromptSession:
    """Build a session that creates a committed variable of ``type``."""
    return NamePromptSession(
        prompt_text=config.naming.new_variable_title,
        find_conflict=lambda name: registry.find_name_conflict(name),
        commit=lambda name: registry.create(registry.real, name, type),
        conflict_message=lambda name, existing: _format_conflict(name, existing, type),
    )


def rename_variable_session(
    registry: VariableRegistry, record: VariableRecord
) -> NamePromptSession:
    """Build a session that renames ``record`` within its namespace."""
    namespace = registry.namespace_of(record)
    return NamePromptSession(
        prompt_text=config.naming.rename_variable_title.replace("%1", record.name),
        find_conflict=lambda name: registry.find_name_conflict(
            name, exclude_type=record.type, namespace=namespace
        ),
        commit=lambda name: registry.rename(record, name),
        conflict_message=lambda name, existing: _format_conflict(
            name, existing, record.type
        ),
    )


def create_variable_interactively(
    registry: VariableRegistry,
    prompt: NamePrompt,
    type: str = "",
    alert: Optional[Alert] = None,
) -> PromptOutcome:
    """
    Prompt for a name and create a variable with it.

    A name already used by any variable, of any type, is rejected and the
    user is asked again with the rejected name as the default.
    """
    return create_variable_session(registry, type).run(prompt, alert)


def rename_variable_interactively(
    registry: VariableRegistry,
    record: VariableRecord,
    prompt: NamePrompt,
    alert: Optional[Alert] = None,
) -> PromptOutcome:
    """
    Prompt for a new name and rename ``record`` to it.

    A name used by a variable of another type is rejected and the user is
    asked again.
    """
    return rename_variable_session(registry, record).run(prompt, alert)
