"""
Type reconciliation across usage sites.

Every usage site of a variable may claim a list of candidate types. The
resolver folds those claims into one list per variable: exact matches are
kept, a bare container is narrowed by a more specific claim (``Array`` and
``Array:String`` give ``Array:String``), equivalent types meet through the
equivalence table, and claims with nothing in common give the conflict
type ``Var``. Conflicts are expected data, so nothing here raises.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from blockvars.config import config
from blockvars.lattice.equivalence import EquivalenceTable
from blockvars.lattice.tree import build_tree, filter_trees, flatten_tree
from blockvars.logging import get_blockvars_logger, log_reconciliation_step

log = get_blockvars_logger("lattice")

# None or an empty sequence means the site knows nothing about the type.
TypeHypothesis = Optional[Sequence[str]]


@dataclass
class ReconciliationStats:
    """Statistics for reconciliation runs."""

    names_reconciled: int = 0
    hypotheses_folded: int = 0
    conflicts_detected: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "names_reconciled": self.names_reconciled,
            "hypotheses_folded": self.hypotheses_folded,
            "conflicts_detected": self.conflicts_detected,
            "conflict_rate": (
                self.conflicts_detected / self.names_reconciled
                if self.names_reconciled > 0
                else 0.0
            ),
        }


class TypeLatticeResolver:
    """
    Reconcile the type claims of every usage site into one type per variable.

    Example:
        resolver = TypeLatticeResolver(EquivalenceTable({"Int": ["Number"]}))
        resolver.reconcile({
            "x": [["Int"], ["Number"]],
            "list": [["Array:String"], ["Array"]],
            "y": [["Number"], ["String"]],
        })
        # {"x": ["Number"], "list": ["Array:String"], "y": ["Var"]}
    """

    def __init__(
        self,
        equivalences: Optional[EquivalenceTable] = None,
        conflict_type: Optional[str] = None,
        separator: Optional[str] = None,
    ):
        """
        Initialize the resolver.

        Args:
            equivalences: Declared type equivalences (empty if omitted)
            conflict_type: Type reported on conflict (defaults to config, "Var")
            separator: Qualifier separator (defaults to config, ":")
        """
        self.equivalences = equivalences if equivalences is not None else EquivalenceTable()
        self.conflict_type = conflict_type or config.lattice.conflict_type
        self.separator = separator or config.lattice.separator
        self.stats = ReconciliationStats()

    def intersect(self, types_a: Sequence[str], types_b: Sequence[str]) -> List[str]:
        """
        Intersect two candidate type lists.

        Output order carries no meaning; compare results as sets.

        Args:
            types_a: First list of type strings
            types_b: Second list of type strings

        Returns:
            The merged list, empty when either side is empty
        """
        if not types_a or not types_b:
            return []
        tree_a = build_tree(self.equivalences.expand_all(types_a), self.separator)
        tree_b = build_tree(self.equivalences.expand_all(types_b), self.separator)
        return flatten_tree(filter_trees(tree_a, tree_b, self.conflict_type), self.separator)

    def fold(self, name: str, hypotheses: Iterable[TypeHypothesis]) -> Optional[List[str]]:
        """
        Fold every hypothesis for one variable into a single type list.

        The first non-empty hypothesis seeds the fold. Once a step comes up
        empty the variable is in conflict and stays ``[conflict_type]``; the
        remaining hypotheses are still walked so each one is logged.

        Returns:
            The reconciled types, or None when no hypothesis was given
        """
        result: Optional[List[str]] = None
        conflicted = False
        for hypothesis in hypotheses:
            if not hypothesis:
                continue
            self.stats.hypotheses_folded += 1
            if result is None:
                result = list(dict.fromkeys(hypothesis))
                continue
            if conflicted:
                log_reconciliation_step(log, name, result, list(hypothesis), result)
                continue

            merged = self.intersect(result, hypothesis)
            if not merged:
                merged = [self.conflict_type]
                conflicted = True
                self.stats.conflicts_detected += 1
                log.warning(f"Type conflict for {name}: {result} vs {list(hypothesis)}")
            log_reconciliation_step(log, name, result, list(hypothesis), merged)
            result = merged
        return result

    def reconcile(
        self, hypotheses_by_name: Mapping[str, Iterable[TypeHypothesis]]
    ) -> Dict[str, List[str]]:
        """
        Reconcile every variable's hypotheses.

        Args:
            hypotheses_by_name: For each variable name, the hypotheses of its
                usage sites in document order

        Returns:
            Reconciled types by name; names without any hypothesis are omitted
        """
        reconciled: Dict[str, List[str]] = {}
        for name, hypotheses in hypotheses_by_name.items():
            result = self.fold(name, hypotheses)
            if result is None:
                log.debug(f"No type information for {name}")
                continue
            reconciled[name] = result
            self.stats.names_reconciled += 1
        return reconciled

    def reconcile_sites(
        self, site_hypotheses: Iterable[Mapping[str, TypeHypothesis]]
    ) -> Dict[str, List[str]]:
        """
        Reconcile per-site claims given as one ``{name: hypothesis}`` mapping per site.

        Variables keep the order in which they were first claimed.
        """
        by_name: Dict[str, List[TypeHypothesis]] = {}
        for claims in site_hypotheses:
            for name, hypothesis in claims.items():
                by_name.setdefault(name, []).append(hypothesis)
        return self.reconcile(by_name)
