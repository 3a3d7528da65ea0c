"""
Type trees for hierarchical type strings.

``Array:String`` and ``Array:Number`` share the ``Array`` prefix, so a list
of type strings is stored as a tree of qualifiers:

    Branch({"Array": Branch({"String": Leaf, "Number": Leaf}), "Number": Leaf})

A ``Leaf`` ends a chain. A ``Branch`` holds more specific qualifiers.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union


@dataclass(frozen=True)
class Leaf:
    """End of a type chain."""

    def __repr__(self) -> str:
        return "Leaf"


LEAF = Leaf()


@dataclass
class Branch:
    """A qualifier with more specific qualifiers beneath it."""

    children: Dict[str, "TypeNode"] = field(default_factory=dict)


TypeNode = Union[Leaf, Branch]


def build_tree(type_strings: Iterable[str], separator: str = ":") -> Branch:
    """
    Merge type strings into one tree.

    A longer chain extends a shorter one (``Array`` then ``Array:String``
    keeps only the branch); a shorter chain never cuts a branch back to a
    leaf, since the branch already covers it.

    Args:
        type_strings: Type strings, already expanded through equivalences
        separator: Qualifier separator

    Returns:
        Root branch of the tree
    """
    root = Branch()
    for type_string in type_strings:
        segments = type_string.split(separator)
        node = root
        for depth, segment in enumerate(segments):
            child = node.children.get(segment)
            if isinstance(child, Branch):
                node = child
            elif depth < len(segments) - 1:
                child = Branch()
                node.children[segment] = child
                node = child
            else:
                node.children[segment] = LEAF
    return root


def filter_trees(first: Branch, second: Branch, conflict_type: str = "Var") -> Optional[Branch]:
    """
    Intersect two trees level by level.

    Only qualifiers present on both sides survive. Against a leaf, the other
    side's subtree is kept whole, so the more specific side wins. Two
    branches are intersected recursively, and when nothing survives below a
    shared qualifier it gets a single ``conflict_type`` leaf instead of
    being dropped.

    Returns:
        The intersected tree, or None when the two levels share nothing
    """
    result: Dict[str, TypeNode] = {}
    for key, node in first.children.items():
        other = second.children.get(key)
        if other is None:
            continue
        if isinstance(node, Leaf):
            result[key] = other
        elif isinstance(other, Leaf):
            result[key] = node
        else:
            narrowed = filter_trees(node, other, conflict_type)
            result[key] = narrowed if narrowed is not None else Branch({conflict_type: LEAF})
    if not result:
        return None
    return Branch(result)


def flatten_tree(tree: Optional[Branch], separator: str = ":") -> List[str]:
    """Turn a tree back into type strings, one per root-to-leaf path."""
    if tree is None:
        return []
    flat: List[str] = []
    for key, node in tree.children.items():
        if isinstance(node, Leaf):
            flat.append(key)
        else:
            flat.extend(f"{key}{separator}{rest}" for rest in flatten_tree(node, separator))
    return flat
