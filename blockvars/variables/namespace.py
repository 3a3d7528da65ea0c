"""
Variable namespaces.

A namespace owns a set of variable records indexed two ways: by id, and by
(lower-cased name, type). Both indices always hold exactly the same records.
Records are only ever added or renamed, never removed.
"""

from typing import Dict, List, Optional, Tuple

from blockvars.errors import NameTypeConflictError
from blockvars.logging import get_blockvars_logger, log_registry_operation
from blockvars.variables.models import VariableRecord, create_variable_id

log = get_blockvars_logger("registry")

NameTypeKey = Tuple[str, str]


class VariableNamespace:
    """
    Mapping of variable records for one document or one preview context.

    Example:
        namespace = VariableNamespace("real")
        counter = namespace.create_variable("counter", "Number")
        namespace.get_variable("COUNTER", "Number") is counter  # True
    """

    def __init__(self, label: str = "real"):
        """
        Initialize an empty namespace.

        Args:
            label: Name used in logs ("real" or "potential")
        """
        self.label = label
        self._by_id: Dict[str, VariableRecord] = {}
        self._by_name_type: Dict[NameTypeKey, VariableRecord] = {}

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, variable_id: object) -> bool:
        return variable_id in self._by_id

    def __repr__(self) -> str:
        return f"VariableNamespace({self.label!r}, {len(self)} variables)"

    def get_variable_by_id(self, variable_id: str) -> Optional[VariableRecord]:
        """Get a variable by its id."""
        return self._by_id.get(variable_id)

    def get_variable(self, name: str, type: str) -> Optional[VariableRecord]:
        """Get a variable by case-insensitive name and exact type."""
        return self._by_name_type.get((name.lower(), type))

    def all_variables(self) -> List[VariableRecord]:
        """All records, in creation order."""
        return list(self._by_id.values())

    def variables_of_type(self, type: str) -> List[VariableRecord]:
        """All records of the given type, in creation order."""
        return [v for v in self._by_id.values() if v.type == type]

    def find_name_conflict(
        self, name: str, exclude_type: Optional[str] = None
    ) -> Optional[VariableRecord]:
        """
        Find a record whose name matches ``name`` case-insensitively.

        Args:
            name: Name to search for
            exclude_type: When given, only records of a different type count

        Returns:
            The first matching record, or None
        """
        key = name.lower()
        for variable in self._by_id.values():
            if variable.name_key != key:
                continue
            if exclude_type is None or variable.type != exclude_type:
                return variable
        return None

    def create_variable(
        self, name: str, type: str = "", variable_id: Optional[str] = None
    ) -> VariableRecord:
        """
        Add a record to the namespace.

        An existing id returns the existing record untouched. An existing
        (name, type) pair is returned as-is when no id was requested, and is
        a conflict when a different id was requested.

        Args:
            name: Display name of the variable
            type: Type string ("" for untyped)
            variable_id: Id to use, or None to allocate one

        Returns:
            The new or existing record

        Raises:
            NameTypeConflictError: (name, type) already belongs to another id
        """
        if variable_id is not None and variable_id in self._by_id:
            return self._by_id[variable_id]

        existing = self.get_variable(name, type)
        if existing is not None:
            if variable_id is None:
                return existing
            raise NameTypeConflictError(
                f'Variable "{name}" of type "{type}" already exists with id '
                f'"{existing.id}"',
                name=name,
                existing=existing,
            )

        record = VariableRecord(
            name=name, type=type, id=variable_id or create_variable_id()
        )
        self._by_id[record.id] = record
        self._by_name_type[(record.name_key, record.type)] = record
        log_registry_operation(
            log, "create", namespace=self.label, id=record.id, name=name, type=type
        )
        return record

    def rename_variable(self, record: VariableRecord, new_name: str) -> VariableRecord:
        """
        Rename a record, keeping both indices in step.

        Raises:
            NameTypeConflictError: another record already has this name and type
        """
        if self._by_id.get(record.id) is not record:
            raise KeyError(f'Variable "{record.id}" is not in the {self.label} namespace')

        old_key = (record.name_key, record.type)
        new_key = (new_name.lower(), record.type)
        holder = self._by_name_type.get(new_key)
        if holder is not None and holder is not record:
            raise NameTypeConflictError(
                f'A variable named "{new_name.lower()}" already exists.',
                name=new_name,
                existing=holder,
            )

        old_name = record.name
        del self._by_name_type[old_key]
        record.name = new_name
        self._by_name_type[new_key] = record
        log_registry_operation(
            log,
            "rename",
            namespace=self.label,
            id=record.id,
            old_name=old_name,
            name=new_name,
        )
        return record
