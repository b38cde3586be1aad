"""Expansion Path Parser — dot-notation directives → Expansion Tree.

Invariants:
    - All functions are PURE: no IO, no side effects
    - Directives sharing a first segment merge under one key
    - A bare directive registers its relation with an empty residual list
    - Residuals are de-duplicated, first-seen order preserved
    - Empty directives and empty segments ("a..b", " ") are ignored

Design Decisions:
    - Same parser at every level: narrowing the tree for a child is just
      re-parsing that relation's residuals (no separate tree walker)
    - dict over set for keys and residuals: insertion order keeps attachment
      order deterministic in the serialized response
"""

from typing import Iterable

from jsonexpand.core.domain_types import ExpansionTree


def split_directive(directive: str) -> list[str]:
    """Split one directive on '.' dropping blank segments."""
    return [part.strip() for part in directive.split(".") if part.strip()]


def parse_expand_directives(directives: Iterable[str]) -> ExpansionTree:
    """Build an Expansion Tree from raw directive strings.

    >>> parse_expand_directives(["city", "city.state.country"])
    {'city': ['state.country']}
    """
    tree: ExpansionTree = {}
    for directive in directives:
        parts = split_directive(directive)
        if not parts:
            continue
        relation, rest = parts[0], parts[1:]
        residuals = tree.setdefault(relation, [])
        if rest:
            residual = ".".join(rest)
            if residual not in residuals:
                residuals.append(residual)
    return tree


def first_segments(directives: Iterable[str]) -> list[str]:
    """Distinct first segments in order of appearance."""
    return list(parse_expand_directives(directives))


def narrow_tree(tree: ExpansionTree, relation: str) -> ExpansionTree:
    """Sub-tree for the record attached under `relation` (empty if none)."""
    return parse_expand_directives(tree.get(relation, []))
