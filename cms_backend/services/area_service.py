# File: cms_backend/services/area_service.py

"""
Area hierarchy resolution.

An area "contains" itself and every area below it. Two equivalent
strategies are available:

  - ``sql``: one recursive CTE, for stores that support WITH RECURSIVE
  - ``memory``: load (id, parent_id) pairs and walk them breadth-first

Both return the ids as text, because ``projects.areas`` is a text column.
"""

import logging
from collections import defaultdict, deque
from typing import Dict, Iterable, List, Optional, Set, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from cms_backend.models.area import Area

logger = logging.getLogger(__name__)


def _as_area_id(value: str | int) -> Optional[int]:
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def area_tree_ids_sql(db: Session, root_id: int) -> Set[str]:
    area_tree = (
        select(Area.id)
        .where(Area.id == root_id)
        .cte(name="area_tree", recursive=True)
    )
    area_tree = area_tree.union_all(
        select(Area.id).join(area_tree, Area.parent_id == area_tree.c.id)
    )
    rows = db.scalars(select(area_tree.c.id)).all()
    return {str(area_id) for area_id in rows}


def closure_from_edges(
    edges: Iterable[Tuple[int, Optional[int]]],
    root_id: int,
) -> Set[int]:
    """
    Breadth-first reflexive-transitive closure over (id, parent_id) pairs.

    Returns an empty set when ``root_id`` is not among the known ids.
    """
    children: Dict[Optional[int], List[int]] = defaultdict(list)
    known: Set[int] = set()
    for area_id, parent_id in edges:
        known.add(area_id)
        children[parent_id].append(area_id)

    if root_id not in known:
        return set()

    found = {root_id}
    queue = deque([root_id])
    while queue:
        current = queue.popleft()
        for child in children.get(current, ()):
            if child not in found:
                found.add(child)
                queue.append(child)
    return found


def area_tree_ids_memory(db: Session, root_id: int) -> Set[str]:
    edges = db.execute(select(Area.id, Area.parent_id)).all()
    return {str(area_id) for area_id in closure_from_edges(edges, root_id)}


def resolve_area_ids(db: Session, area: str | int, strategy: str = "sql") -> Set[str]:
    """
    Ids of ``area`` and all of its descendants, as strings.

    A value that is not an integer id resolves to an empty set.
    """
    root_id = _as_area_id(area)
    if root_id is None:
        logger.debug("Ignoring non-numeric area filter %r", area)
        return set()
    if strategy == "memory":
        return area_tree_ids_memory(db, root_id)
    return area_tree_ids_sql(db, root_id)
