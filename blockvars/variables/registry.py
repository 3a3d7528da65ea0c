"""
Variable identity resolution across the real and potential namespaces.

The real namespace holds the variables committed to the document. The
potential namespace, when attached, holds variables created while
previewing content (for example a palette) that has not been committed yet.
Lookups always prefer ids to (name, type) pairs and always try the real
namespace before the potential one.
"""

from typing import List, Optional

from blockvars.errors import MissingTypeError, NameTypeConflictError
from blockvars.logging import get_blockvars_logger, log_registry_operation
from blockvars.variables.models import VariableRecord
from blockvars.variables.namespace import VariableNamespace
from blockvars.variables.naming import generate_unique_name

log = get_blockvars_logger("registry")


class VariableRegistry:
    """
    Authoritative variable collection for one editing session.

    Example:
        registry = VariableRegistry()
        x = registry.get_or_create(name="x", type="Number")
        registry.lookup(variable_id=x.id) is x  # True
    """

    def __init__(
        self,
        real: Optional[VariableNamespace] = None,
        potential: Optional[VariableNamespace] = None,
    ):
        """
        Initialize the registry.

        Args:
            real: Committed namespace (a fresh one is created if omitted)
            potential: Optional preview namespace
        """
        self.real = real if real is not None else VariableNamespace("real")
        self.potential = potential

    def attach_potential(self, potential: Optional[VariableNamespace] = None) -> VariableNamespace:
        """Attach (or replace) the preview namespace and return it."""
        self.potential = potential if potential is not None else VariableNamespace("potential")
        return self.potential

    def detach_potential(self) -> None:
        """Drop the preview namespace and everything created in it."""
        self.potential = None

    def namespace_of(self, record: VariableRecord) -> VariableNamespace:
        """Return the namespace that owns ``record``."""
        if self.real.get_variable_by_id(record.id) is record:
            return self.real
        if self.potential is not None and self.potential.get_variable_by_id(record.id) is record:
            return self.potential
        raise KeyError(f'Variable "{record.id}" is not owned by this registry')

    def find_name_conflict(
        self,
        name: str,
        exclude_type: Optional[str] = None,
        namespace: Optional[VariableNamespace] = None,
    ) -> Optional[VariableRecord]:
        """
        Find a record that a new or renamed variable called ``name`` would collide with.

        Args:
            name: Candidate name (compared case-insensitively)
            exclude_type: Ignore records of this type ("rename" mode); None
                matches records of any type ("create" mode)
            namespace: Namespace to search (defaults to the real one)

        Returns:
            The colliding record, or None
        """
        namespace = namespace if namespace is not None else self.real
        return namespace.find_name_conflict(name, exclude_type=exclude_type)

    def lookup(
        self,
        variable_id: Optional[str] = None,
        name: Optional[str] = None,
        type: Optional[str] = None,
    ) -> Optional[VariableRecord]:
        """
        Look up a variable without creating it.

        Order: id in real, id in potential, (name, type) in real,
        (name, type) in potential.

        Args:
            variable_id: Id to look up, or None
            name: Name to look up if the id lookup fails
            type: Type to pair with ``name``; required whenever ``name`` is given

        Returns:
            The matching record, or None

        Raises:
            MissingTypeError: ``name`` given without ``type``
        """
        if variable_id:
            variable = self.real.get_variable_by_id(variable_id)
            if variable is None and self.potential is not None:
                variable = self.potential.get_variable_by_id(variable_id)
            if variable is not None:
                return variable

        if name:
            if type is None:
                raise MissingTypeError(
                    "Tried to look up a variable by name without a type", name=name
                )
            variable = self.real.get_variable(name, type)
            if variable is None and self.potential is not None:
                variable = self.potential.get_variable(name, type)
            return variable

        return None

    def create(
        self,
        namespace: VariableNamespace,
        name: Optional[str] = None,
        type: Optional[str] = None,
        variable_id: Optional[str] = None,
        check_conflicts: bool = False,
        allow_conflict: bool = False,
    ) -> VariableRecord:
        """
        Create a variable in ``namespace``.

        An id that already exists in either namespace returns the existing
        record with no mutation. Unnamed variables get a generated name that
        is unique in the real namespace, even when created in the potential
        one, so preview names never shadow committed ones.

        Args:
            namespace: Namespace that will own the record
            name: Display name, or None to generate one
            type: Type string, or None for untyped
            variable_id: Id to use, or None to allocate one
            check_conflicts: Reject names already used with another type
            allow_conflict: Create anyway when ``check_conflicts`` finds a clash

        Returns:
            The new or existing record

        Raises:
            NameTypeConflictError: the name is taken by a differently-typed record
        """
        if variable_id is not None:
            # Ids are never duplicated across the two namespaces.
            existing = namespace.get_variable_by_id(variable_id) or self.lookup(
                variable_id=variable_id
            )
            if existing is not None:
                return existing

        type = type or ""
        if not name:
            name = generate_unique_name(self.real)

        if check_conflicts and not allow_conflict:
            clash = namespace.find_name_conflict(name, exclude_type=type)
            if clash is not None:
                log.warning(
                    f'Name "{name}" already used for type "{clash.type}" in {namespace.label}'
                )
                raise NameTypeConflictError(
                    f'A variable named "{name.lower()}" already exists for another '
                    f'type: "{clash.type}".',
                    name=name,
                    existing=clash,
                )

        return namespace.create_variable(name, type, variable_id)

    def get_or_create(
        self,
        variable_id: Optional[str] = None,
        name: Optional[str] = None,
        type: Optional[str] = None,
    ) -> VariableRecord:
        """
        Look up a variable, creating it if no record matches.

        New records go to the potential namespace when one is attached,
        otherwise to the real namespace.
        """
        variable = self.lookup(variable_id, name, type)
        if variable is None:
            target = self.potential if self.potential is not None else self.real
            variable = self.create(target, name, type, variable_id)
        return variable

    def rename(
        self,
        record: VariableRecord,
        new_name: str,
        check_other_types: bool = False,
    ) -> VariableRecord:
        """
        Rename a variable within its own namespace.

        Two records may share a name only when their types differ, so a
        record with the same name and type always blocks the rename. With
        ``check_other_types`` a same-named record of another type blocks it
        as well.

        Raises:
            NameTypeConflictError: carries the conflicting record
        """
        namespace = self.namespace_of(record)
        if check_other_types:
            clash = namespace.find_name_conflict(new_name, exclude_type=record.type)
            if clash is not None:
                log.warning(
                    f'Rename of "{record.name}" to "{new_name}" blocked by type "{clash.type}"'
                )
                raise NameTypeConflictError(
                    f'A variable named "{new_name.lower()}" already exists for another '
                    f'type: "{clash.type}".',
                    name=new_name,
                    existing=clash,
                )
        return namespace.rename_variable(record, new_name)

    def all_variables(self) -> List[VariableRecord]:
        """All committed variables, in creation order."""
        return self.real.all_variables()

    def get_added_variables(self, original: List[VariableRecord]) -> List[VariableRecord]:
        """
        Variables committed since ``original`` was snapshotted.

        Args:
            original: Result of an earlier ``all_variables()`` call

        Returns:
            Records present now but not in ``original``, or [] if none were added
        """
        current = self.real.all_variables()
        if len(current) == len(original):
            return []
        known = {variable.id for variable in original}
        added = [variable for variable in current if variable.id not in known]
        log_registry_operation(log, "added_since_snapshot", count=len(added))
        return added
