"""
Path Highlighter.

Works on the flat entity list, not on the built forest: walks parent_id
references from a target up to its root. Used to emphasize a selected
node's reporting chain and to reveal search matches by expanding their
ancestors.
"""

import logging
from typing import AbstractSet, Dict, Iterable, List, Set

from .types import Entity, SearchReveal

logger = logging.getLogger(__name__)


def _index(entities: Iterable[Entity]) -> Dict[int, Entity]:
    index: Dict[int, Entity] = {}
    for entity in entities:
        index.setdefault(entity.id, entity)
    return index


def _chain(index: Dict[int, Entity], target_id: int) -> List[int]:
    """Ids from target upward, stopping at a root, a dangling reference or a repeat."""
    if target_id not in index:
        return []
    chain = [target_id]
    seen = {target_id}
    current = index[target_id]
    while current.has_own_parent() and current.parent_id in index:
        if current.parent_id in seen:
            logger.warning("Reporting cycle reached at %s while walking from %s",
                           current.parent_id, target_id)
            break
        chain.append(current.parent_id)
        seen.add(current.parent_id)
        current = index[current.parent_id]
    return chain


def reporting_chain(entities: Iterable[Entity], target_id: int) -> List[int]:
    """Ordered ids from target_id up to its root; empty for an unknown target."""
    return _chain(_index(entities), target_id)


def highlight_path(entities: Iterable[Entity], target_id: int) -> Set[int]:
    """
    Ids on the chain from target_id up to its root, target included.

    Returns an empty set when the target is unknown.
    """
    return set(_chain(_index(entities), target_id))


def ensure_visible(entities: Iterable[Entity], expanded: AbstractSet[int],
                   target_id: int) -> Set[int]:
    """
    Copy of `expanded` with every ancestor of target_id added.

    The target itself is not added: a node is visible when its parent is
    expanded.
    """
    result = set(expanded)
    result.update(_chain(_index(entities), target_id)[1:])
    return result


def _matches(entity: Entity, needle: str) -> bool:
    if needle in entity.name.casefold():
        return True
    return any(isinstance(value, str) and needle in value.casefold()
               for value in entity.display_fields.values())


def search(entities: Iterable[Entity], query: str) -> List[int]:
    """
    Find entities matching a query (case-insensitive substring).

    Searches names and string display fields. Results are ordered by name,
    then id. A blank query matches nothing.
    """
    needle = query.strip().casefold()
    if not needle:
        return []
    found = [e for e in _index(entities).values() if _matches(e, needle)]
    return [e.id for e in sorted(found, key=lambda e: e.sort_key)]


def reveal(entities: Iterable[Entity], expanded: AbstractSet[int], query: str) -> SearchReveal:
    """Search, then expand and highlight the reporting chain of every match."""
    index = _index(entities)
    matches = search(index.values(), query)
    new_expanded = set(expanded)
    highlighted: Set[int] = set()
    for match in matches:
        chain = _chain(index, match)
        new_expanded.update(chain[1:])
        highlighted.update(chain)
    logger.debug("Search %r matched %d entities", query, len(matches))
    return SearchReveal(matches=matches, expanded=new_expanded, highlighted=highlighted)
