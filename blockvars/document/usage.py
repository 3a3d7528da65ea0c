"""
Usage sites and the capabilities they expose.

A usage site is one block of a document. What a site can tell us about
variables is declared by the capability interfaces it implements; the
collection functions below dispatch on those interfaces only.

- **HasVariableModels**: the variable records the site already holds
- **HasVariableUses**: the variable references the site makes
- **HasTypeHypotheses**: candidate types the site claims for variables
- **HasDeveloperVariables**: hidden variables the site needs in generated code
- **LegacyDeveloperVariables**: the deprecated spelling of the above
- **HasProcedureSignature**: the site defines a procedure with parameters
- **InitializesVariable**: the site declares a local variable
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

from blockvars.errors import InvalidRootError
from blockvars.lattice.resolver import TypeHypothesis, TypeLatticeResolver
from blockvars.logging import get_blockvars_logger
from blockvars.variables.models import VariableRecord, VariableReference
from blockvars.variables.registry import VariableRegistry

log = get_blockvars_logger("document")


class UsageSite:
    """
    One block of a document, possibly nested inside another.

    Subclasses add capability interfaces to say what they know about
    variables.
    """

    def __init__(self, site_type: str, site_id: Optional[str] = None):
        self.site_type = site_type
        self.site_id = site_id or uuid.uuid4().hex
        self._parent: Optional["UsageSite"] = None
        self._children: List["UsageSite"] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.site_type!r}, {self.site_id!r})"

    def get_parent(self) -> Optional["UsageSite"]:
        return self._parent

    def get_children(self) -> List["UsageSite"]:
        return list(self._children)

    def add_child(self, child: "UsageSite") -> "UsageSite":
        """Nest ``child`` under this site and return it."""
        child._parent = self
        self._children.append(child)
        return child

    def get_descendants(self) -> List["UsageSite"]:
        """This site followed by every nested site, depth first."""
        sites: List[UsageSite] = [self]
        for child in self._children:
            sites.extend(child.get_descendants())
        return sites


class Document(ABC):
    """A document holding usage sites."""

    @abstractmethod
    def get_all_usage_sites(self) -> List[UsageSite]:
        """Every usage site in the document, nested ones included."""


class HasVariableModels(ABC):
    @abstractmethod
    def get_variable_models(self) -> List[VariableRecord]:
        """Variable records this site holds."""


class HasVariableUses(ABC):
    @abstractmethod
    def get_variable_references(self) -> List[VariableReference]:
        """References to variables made by this site."""


class HasTypeHypotheses(ABC):
    @abstractmethod
    def declared_type_hypotheses(self) -> Dict[str, TypeHypothesis]:
        """Candidate types this site claims, by variable name."""


class HasDeveloperVariables(ABC):
    @abstractmethod
    def get_developer_variables(self) -> List[str]:
        """Names declared as globals in generated code but never shown to the user."""


class LegacyDeveloperVariables(ABC):
    """Deprecated spelling of ``HasDeveloperVariables``."""

    @abstractmethod
    def get_developer_vars(self) -> List[str]:
        """Same as ``HasDeveloperVariables.get_developer_variables``."""


class HasProcedureSignature(ABC):
    @abstractmethod
    def get_procedure_def(self) -> Tuple[str, List[str]]:
        """The procedure name and its parameter names."""


class InitializesVariable(ABC):
    @abstractmethod
    def initialized_variable(self) -> Optional[str]:
        """Name of the local variable this site declares, if any."""


@dataclass
class WarningRegistry:
    """
    One-time warnings for a single editing session.

    Create one per session and pass it to whatever needs to warn.
    """

    warned: Set[str] = field(default_factory=set)

    def warn_once(self, key: str, message: str) -> bool:
        """Log ``message`` unless ``key`` has already warned; return True if logged."""
        if key in self.warned:
            return False
        self.warned.add(key)
        log.warning(message)
        return True


Root = Union[UsageSite, Document]


def usage_sites(root: Root) -> List[UsageSite]:
    """
    Every usage site under ``root``.

    Args:
        root: A usage site (its subtree is used) or a document

    Raises:
        InvalidRootError: ``root`` is neither
    """
    if isinstance(root, UsageSite):
        return root.get_descendants()
    if isinstance(root, Document):
        return root.get_all_usage_sites()
    raise InvalidRootError(f"Not a usage site or document: {root!r}", root=root)


def all_used_variable_models(root: Root) -> List[VariableRecord]:
    """
    Variable records held by the sites under ``root``.

    Each record appears once (by id), in order of first use. Nothing is
    looked up or created.
    """
    records: Dict[str, VariableRecord] = {}
    for site in usage_sites(root):
        if isinstance(site, HasVariableModels):
            for record in site.get_variable_models():
                records.setdefault(record.id, record)
    return list(records.values())


def resolve_variable_references(root: Root, registry: VariableRegistry) -> List[VariableRecord]:
    """
    Resolve every variable reference under ``root`` to a record in ``registry``.

    Unlike ``all_used_variable_models`` this mutates ``registry``: references
    are resolved with ``get_or_create``, so unknown variables are created and
    a reference carrying only a type gets a new generated name on every call.
    Each record appears once, in order of first use.

    Raises:
        MissingTypeError: a reference names a variable without a type
    """
    records: Dict[str, VariableRecord] = {}
    for site in usage_sites(root):
        if not isinstance(site, HasVariableUses):
            continue
        for reference in site.get_variable_references():
            if not reference.id and not reference.name and reference.type is None:
                continue
            record = registry.get_or_create(reference.id, reference.name, reference.type)
            records.setdefault(record.id, record)
    return list(records.values())


def all_variable_names(root: Root) -> List[str]:
    """
    Names of every variable referenced under ``root``.

    Names are de-duplicated case-insensitively; the last spelling seen wins.
    References without a name (half-built blocks) are skipped.
    """
    names: Dict[str, str] = {}
    for site in usage_sites(root):
        if not isinstance(site, HasVariableUses):
            continue
        for reference in site.get_variable_references():
            if reference.name:
                names[reference.name.lower()] = reference.name
    return list(names.values())


def all_developer_variables(root: Root, warnings: WarningRegistry) -> List[str]:
    """
    Developer variable names used under ``root``, without duplicates.

    Sites that only offer the legacy ``get_developer_vars`` still count, with
    one deprecation warning per site type per session.
    """
    names: Dict[str, None] = {}
    for site in usage_sites(root):
        if isinstance(site, HasDeveloperVariables):
            declared = site.get_developer_variables()
        elif isinstance(site, LegacyDeveloperVariables):
            warnings.warn_once(
                f"developer_vars:{site.site_type}",
                "get_developer_vars() is deprecated. Use get_developer_variables() "
                f"(site type '{site.site_type}')",
            )
            declared = site.get_developer_vars()
        else:
            continue
        for name in declared:
            names[name] = None
    return list(names)


def collect_type_hypotheses(root: Root) -> List[Dict[str, TypeHypothesis]]:
    """The type claims of every site under ``root``, in site order."""
    return [
        site.declared_type_hypotheses()
        for site in usage_sites(root)
        if isinstance(site, HasTypeHypotheses)
    ]


def all_variable_types(root: Root, resolver: TypeLatticeResolver) -> Dict[str, List[str]]:
    """
    Reconciled type of every variable that some site under ``root`` makes a claim about.

    Raises:
        InvalidRootError: ``root`` is neither a usage site nor a document
    """
    claims = collect_type_hypotheses(root)
    log.debug(f"Collected type claims from {len(claims)} site(s)")
    return resolver.reconcile_sites(claims)


def local_context(site: UsageSite, name: Optional[str]) -> Optional[str]:
    """
    Find the procedure a variable is local to.

    Walks up from ``site``. The variable is local when the first enclosing
    procedure has it as a parameter, or when it was declared by an
    initializing site on the way up; in both cases the result is the
    procedure name followed by ``"."``. Global variables give None.

    Args:
        site: Site where the variable is used
        name: Variable name, or None to ask for the enclosing procedure only
    """
    current: Optional[UsageSite] = site
    while current is not None:
        if isinstance(current, HasProcedureSignature):
            procedure, params = current.get_procedure_def()
            if name is None or name in params:
                return procedure + "."
            return None
        if isinstance(current, InitializesVariable) and current.initialized_variable() == name:
            # Declared here, so it belongs to whichever procedure encloses us.
            name = None
        current = current.get_parent()
    return None


class StaticUsageSite(UsageSite, HasVariableModels, HasVariableUses, HasTypeHypotheses):
    """
    A usage site backed by recorded data, e.g. loaded from a JSON export.

    References that carry both an id and a name count as the site's
    existing variable records.
    """

    def __init__(
        self,
        site_type: str = "block",
        site_id: Optional[str] = None,
        references: Optional[Iterable[VariableReference]] = None,
        type_hypotheses: Optional[Dict[str, TypeHypothesis]] = None,
    ):
        super().__init__(site_type, site_id)
        self.references = list(references or [])
        self.type_hypotheses = dict(type_hypotheses or {})

    def get_variable_models(self) -> List[VariableRecord]:
        return [
            VariableRecord(name=ref.name, type=ref.type or "", id=ref.id)
            for ref in self.references
            if ref.id and ref.name
        ]

    def get_variable_references(self) -> List[VariableReference]:
        return list(self.references)

    def declared_type_hypotheses(self) -> Dict[str, TypeHypothesis]:
        return dict(self.type_hypotheses)

    @classmethod
    def from_dict(cls, data: Dict) -> "StaticUsageSite":
        """
        Create from dictionary.

        Expected keys (all optional): ``type``, ``id``, ``variables`` (list
        of ``{"id", "name", "type"}``), ``types`` (``{name: [type, ...]}``)
        and ``children`` (nested sites).
        """
        site = cls(
            site_type=data.get("type", "block"),
            site_id=data.get("id"),
            references=[
                VariableReference(id=v.get("id"), name=v.get("name"), type=v.get("type"))
                for v in data.get("variables", [])
            ],
            type_hypotheses=data.get("types", {}),
        )
        for child in data.get("children", []):
            site.add_child(cls.from_dict(child))
        return site


class StaticDocument(Document):
    """A document made of top-level static usage sites."""

    def __init__(self, sites: Optional[Iterable[UsageSite]] = None):
        self.top_sites = list(sites or [])

    def get_all_usage_sites(self) -> List[UsageSite]:
        sites: List[UsageSite] = []
        for top in self.top_sites:
            sites.extend(top.get_descendants())
        return sites

    @classmethod
    def from_dict(cls, data: Dict) -> "StaticDocument":
        """Create from ``{"sites": [...]}``."""
        return cls(StaticUsageSite.from_dict(site) for site in data.get("sites", []))
