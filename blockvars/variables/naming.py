"""
Generation of variable names that are not yet in use.

Candidates run through single letters starting at 'i' ('l' is skipped, it
reads too much like '1'), then repeat the cycle with a numeric suffix:
i, j, k, m, ..., h, i2, j2, ..., h2, i3, ...
"""

from __future__ import annotations

from itertools import count
from typing import TYPE_CHECKING, Iterator, Optional

from blockvars.config import config

if TYPE_CHECKING:
    from blockvars.variables.namespace import VariableNamespace

DEFAULT_LETTERS = "ijkmnopqrstuvwxyzabcdefgh"


def candidate_names(letters: Optional[str] = None) -> Iterator[str]:
    """
    Yield the infinite sequence of candidate names.

    Args:
        letters: Letter cycle to use (defaults to the configured cycle)

    Yields:
        Candidate names in order of preference
    """
    letters = letters or config.naming.candidate_letters
    for suffix in count(1):
        tail = str(suffix) if suffix > 1 else ""
        for letter in letters:
            yield letter + tail


def generate_unique_name(namespace: VariableNamespace, letters: Optional[str] = None) -> str:
    """
    Return a new variable name that is not yet used in the namespace.

    Comparison against existing names is case-insensitive. The sequence is
    infinite and the namespace finite, so this always terminates.

    Args:
        namespace: Namespace to be unique in
        letters: Letter cycle to use (defaults to the configured cycle)

    Returns:
        The first unused candidate name
    """
    letters = letters or config.naming.candidate_letters
    variables = namespace.all_variables()
    if not variables:
        return letters[0]

    used = {variable.name_key for variable in variables}
    return next(
        candidate
        for candidate in candidate_names(letters)
        if candidate.lower() not in used
    )
