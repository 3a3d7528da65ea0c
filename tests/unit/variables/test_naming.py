"""
Tests for unique variable name generation.
"""

from itertools import islice
from typing import get_type_hints

from blockvars.variables import naming
from blockvars.variables.namespace import VariableNamespace
from blockvars.variables.naming import (
    DEFAULT_LETTERS,
    candidate_names,
    generate_unique_name,
)


def namespace_with(*names: str) -> VariableNamespace:
    namespace = VariableNamespace()
    for name in names:
        namespace.create_variable(name)
    return namespace


class TestCandidateNames:
    """Test the candidate name sequence."""

    def test_letters_skip_l(self):
        """The cycle has 25 letters and never uses 'l'."""
        assert len(DEFAULT_LETTERS) == 25
        assert "l" not in DEFAULT_LETTERS
        assert set(DEFAULT_LETTERS) == set("abcdefghijkmnopqrstuvwxyz")

    def test_sequence_order(self):
        """The sequence starts at i and wraps around to h before adding suffixes."""
        names = list(islice(candidate_names(DEFAULT_LETTERS), 27))
        assert names[:4] == ["i", "j", "k", "m"]
        assert names[24] == "h"
        assert names[25:] == ["i2", "j2"]


class TestGenerateUniqueName:
    """Test generate_unique_name."""

    def test_namespace_annotation(self):
        """The namespace parameter is annotated with VariableNamespace."""
        hints = get_type_hints(
            generate_unique_name,
            globalns={**vars(naming), "VariableNamespace": VariableNamespace},
        )
        assert hints["namespace"] is VariableNamespace

    def test_empty_namespace(self):
        """An empty namespace gets 'i'."""
        assert generate_unique_name(VariableNamespace()) == "i"

    def test_skips_used_names(self):
        """Used names are skipped in order."""
        assert generate_unique_name(namespace_with("i")) == "j"
        assert generate_unique_name(namespace_with("i", "j", "k")) == "m"

    def test_case_insensitive(self):
        """Existing names are compared case-insensitively."""
        assert generate_unique_name(namespace_with("I", "J")) == "k"

    def test_unrelated_names_do_not_block(self):
        """Names outside the cycle leave 'i' free."""
        assert generate_unique_name(namespace_with("counter", "total")) == "i"

    def test_wraps_to_start_of_alphabet(self):
        """With i..z taken, generation continues with 'a'."""
        taken = [letter for letter in "ijkmnopqrstuvwxyz"]
        assert generate_unique_name(namespace_with(*taken)) == "a"

    def test_suffix_after_full_cycle(self):
        """Once every letter is taken the suffix 2 is used."""
        assert generate_unique_name(namespace_with(*DEFAULT_LETTERS)) == "i2"

    def test_suffix_cycle_continues(self):
        """The suffixed cycle is walked like the plain one."""
        names = list(DEFAULT_LETTERS) + ["i2", "J2"]
        assert generate_unique_name(namespace_with(*names)) == "k2"

    def test_suffix_three(self):
        """After two full cycles the suffix is 3."""
        names = list(DEFAULT_LETTERS) + [letter + "2" for letter in DEFAULT_LETTERS]
        assert generate_unique_name(namespace_with(*names)) == "i3"

    def test_deterministic(self):
        """The same namespace always gives the same name."""
        namespace = namespace_with("i", "k", "x")
        assert generate_unique_name(namespace) == generate_unique_name(namespace)

    def test_generated_name_is_unused(self):
        """The generated name never matches an existing one."""
        namespace = namespace_with("i", "J", "k", "M", "n2", "q")
        name = generate_unique_name(namespace)
        assert name.lower() not in {v.name.lower() for v in namespace.all_variables()}

    def test_custom_letters(self):
        """A custom letter cycle is honoured."""
        assert generate_unique_name(namespace_with("x"), letters="xy") == "y"
        assert generate_unique_name(namespace_with("x", "y"), letters="xy") == "x2"
