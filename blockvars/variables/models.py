"""
Data structures for variable records.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


def create_variable_id() -> str:
    """Allocate a new stable variable identifier."""
    return uuid.uuid4().hex


@dataclass
class VariableRecord:
    """
    One user-visible variable: a stable id plus a name and a type.

    The empty type string means "untyped". The id never changes; the name
    only changes through ``VariableNamespace.rename_variable``.
    """

    name: str
    type: str = ""
    id: str = field(default_factory=create_variable_id)

    @property
    def name_key(self) -> str:
        """Case-insensitive form of the name used for comparisons."""
        return self.name.lower()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"id": self.id, "name": self.name, "type": self.type}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VariableRecord":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            type=data.get("type", ""),
            id=data.get("id") or create_variable_id(),
        )


@dataclass
class VariableReference:
    """
    A reference to a variable made by one usage site.

    Any of the fields may be missing; a half-built block may not know the
    name yet, and older documents may not carry ids.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None

