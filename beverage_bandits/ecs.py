from __future__ import annotations

from collections import defaultdict
from typing import Any, DefaultDict, Dict, FrozenSet, List, Tuple, Type, TypeVar

T = TypeVar("T")

View = Tuple[Tuple[int, ...], Tuple[Tuple[Any, ...], ...]]


class World:
    """
    Entity store for the battle's units:
      - component stores per type: Dict[type, Dict[entity, component]]
      - view() with cached, IMMUTABLE tuples ordered by entity id
      - reverse dirty index: component_type -> affected view keys

    Entity ids are handed out in creation order and never reused, so a dead
    unit's id can't be picked up by another unit.
    """

    def __init__(self) -> None:
        self._next_eid: int = 1
        self.stores: Dict[Type[Any], Dict[int, Any]] = {}
        self._view_cache: Dict[FrozenSet[Type[Any]], View] = {}
        self._view_dirty: Dict[FrozenSet[Type[Any]], bool] = {}
        self._comp_to_views: DefaultDict[Type[Any], List[FrozenSet[Type[Any]]]] = defaultdict(list)

    # ---- Entity & Components ----
    def create(self) -> int:
        eid = self._next_eid
        self._next_eid += 1
        return eid

    def add(self, entity: int, component: Any) -> None:
        store = self.stores.setdefault(type(component), {})
        store[entity] = component
        self._mark_dirty_for(type(component))

    def get(self, entity: int, comp_type: Type[T]) -> T | None:
        store = self.stores.get(comp_type)
        return None if store is None else store.get(entity)

    def require(self, entity: int, comp_type: Type[T]) -> T:
        comp = self.get(entity, comp_type)
        if comp is None:
            raise KeyError(f"entity {entity} has no {comp_type.__name__}")
        return comp

    def has(self, entity: int, comp_type: Type[Any]) -> bool:
        return entity in self.stores.get(comp_type, {})

    def destroy(self, entity: int) -> None:
        for comp_type, store in self.stores.items():
            if entity in store:
                del store[entity]
                self._mark_dirty_for(comp_type)

    # ---- Views ----
    def view(self, *comp_types: Type[Any]) -> View:
        """
        Returns immutable tuple of (entities, component tuples).

        Rows hold the live component objects, so in-place edits show through
        a cached view; only add/destroy invalidate it.
        """
        key = frozenset(comp_types)
        cached = self._view_cache.get(key)
        if cached is not None and not self._view_dirty.get(key, True):
            # Same key, different argument order: rebuild rows in the caller's order
            if cached[1] and tuple(type(c) for c in cached[1][0]) != comp_types:
                return cached[0], tuple(
                    tuple(self.stores[ct][e] for ct in comp_types) for e in cached[0]
                )
            return cached

        entities = None
        for ct in comp_types:
            ids = set(self.stores.get(ct, {}).keys())
            entities = ids if entities is None else (entities & ids)

        ent_sorted = tuple(sorted(entities or ()))
        rows = tuple(tuple(self.stores[ct][e] for ct in comp_types) for e in ent_sorted)

        result = (ent_sorted, rows)
        self._view_cache[key] = result
        self._view_dirty[key] = False

        for ct in key:
            lst = self._comp_to_views[ct]
            if key not in lst:
                lst.append(key)
        return result

    def _mark_dirty_for(self, comp_type: Type[Any]) -> None:
        for key in self._comp_to_views.get(comp_type, []):
            self._view_dirty[key] = True
