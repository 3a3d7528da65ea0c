"""
Type lattice reconciliation for variables.

Hierarchical type strings (``Map:Array:Number``) are merged through a tree
of qualifiers, after one level of expansion through a table of declared
equivalences.
"""

from .tree import (
    LEAF,
    Branch,
    Leaf,
    TypeNode,
    build_tree,
    filter_trees,
    flatten_tree,
)

from .equivalence import EquivalenceTable

from .resolver import (
    ReconciliationStats,
    TypeHypothesis,
    TypeLatticeResolver,
)

__all__ = [
    # Trees
    "LEAF",
    "Branch",
    "Leaf",
    "TypeNode",
    "build_tree",
    "filter_trees",
    "flatten_tree",
    # Equivalences
    "EquivalenceTable",
    # Resolver
    "ReconciliationStats",
    "TypeHypothesis",
    "TypeLatticeResolver",
]
