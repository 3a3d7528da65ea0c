"""
Declared type equivalences.

An entry such as ``"Int": ["Number"]`` lets a usage site that says ``Int``
agree with one that says ``Number``. Expansion is a single lookup: if
``A -> [B]`` and ``B -> [C]``, expanding ``A`` gives ``[B]``, not ``C``.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from blockvars.config import config
from blockvars.logging import get_blockvars_logger

log = get_blockvars_logger("lattice")


@dataclass
class EquivalenceTable:
    """Static mapping from a type string to the type strings it stands for."""

    entries: Dict[str, List[str]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, type_string: object) -> bool:
        return type_string in self.entries

    def expand(self, type_string: str) -> List[str]:
        """Expand one type string; a type without an entry expands to itself."""
        expansion = self.entries.get(type_string)
        if not expansion:
            return [type_string]
        return list(expansion)

    def expand_all(self, type_strings: Iterable[str]) -> List[str]:
        """Expand every type string, keeping order."""
        expanded: List[str] = []
        for type_string in type_strings:
            expanded.extend(self.expand(type_string))
        return expanded

    def to_dict(self) -> Dict[str, List[str]]:
        """Convert to dictionary for serialization."""
        return {key: list(value) for key, value in self.entries.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, List[str]]) -> "EquivalenceTable":
        """
        Create from dictionary.

        Raises:
            ValueError: an entry is not a list of strings
        """
        entries: Dict[str, List[str]] = {}
        for key, value in data.items():
            if isinstance(value, str) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"Equivalence for {key!r} must be a list of type strings")
            entries[key] = list(value)
        return cls(entries=entries)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "EquivalenceTable":
        """Load a table from a JSON file."""
        path = Path(path)
        with open(path) as f:
            data = json.load(f)
        table = cls.from_dict(data)
        log.info(f"Loaded {len(table)} type equivalences from {path}")
        return table

    @classmethod
    def from_config(cls, equivalence_path: Optional[Path] = None) -> "EquivalenceTable":
        """Load the configured table, or an empty one when none is configured."""
        path = equivalence_path or config.lattice.equivalence_path
        if path is None:
            return cls()
        return cls.load(path)
