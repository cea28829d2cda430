"""World - entity arena with component storage and queries."""

from __future__ import annotations

from typing import Any, Generator, TypeVar, cast

from tick_habitat.types import DeadEntityError, EntityId

T = TypeVar("T")


class World:
    """Stable-id arena of live entities.

    Entity ids are never reused. Live ids keep their spawn order, which is
    the order the engine visits them in.
    """

    def __init__(self) -> None:
        self._components: dict[type, dict[int, Any]] = {}
        self._next_id: int = 0
        # dict rather than set: iteration follows spawn order.
        self._alive: dict[int, None] = {}

    def spawn(self) -> EntityId:
        eid = self._next_id
        self._next_id += 1
        self._alive[eid] = None
        return eid

    def despawn(self, entity_id: EntityId) -> None:
        self._alive.pop(entity_id, None)
        for store in self._components.values():
            store.pop(entity_id, None)

    def attach(self, entity_id: EntityId, component: Any) -> None:
        ctype = type(component)
        if entity_id not in self._alive:
            raise DeadEntityError(
                entity_id,
                f"Cannot attach {ctype.__name__} to dead entity {entity_id}",
            )
        self._components.setdefault(ctype, {})[entity_id] = component

    def detach(self, entity_id: EntityId, component_type: type) -> None:
        store = self._components.get(component_type)
        if store is not None:
            store.pop(entity_id, None)

    def get(self, entity_id: EntityId, component_type: type[T]) -> T:
        if entity_id not in self._alive:
            raise DeadEntityError(
                entity_id, f"Entity {entity_id} is not alive"
            )
        store = self._components.get(component_type)
        if store is None or entity_id not in store:
            raise KeyError(
                f"Entity {entity_id} has no {component_type.__name__} component"
            )
        return cast(T, store[entity_id])

    def find(self, entity_id: EntityId, component_type: type[T]) -> T | None:
        """Like get(), but None for dead entities or a missing component."""
        if entity_id not in self._alive:
            return None
        store = self._components.get(component_type)
        if store is None:
            return None
        return cast("T | None", store.get(entity_id))

    def has(self, entity_id: EntityId, component_type: type) -> bool:
        if entity_id not in self._alive:
            return False
        store = self._components.get(component_type)
        return store is not None and entity_id in store

    def query(
        self, *ctypes: type
    ) -> Generator[tuple[EntityId, tuple[Any, ...]], None, None]:
        if not ctypes:
            return
        base_store = self._components.get(ctypes[0])
        if base_store is None:
            return

        # Walk live ids, not the store, so results follow spawn order.
        for eid in list(self._alive):
            if eid not in self._alive or eid not in base_store:
                continue
            components: list[Any] = []
            for ctype in ctypes:
                store = self._components.get(ctype)
                if store is None or eid not in store:
                    break
                components.append(store[eid])
            else:
                yield eid, tuple(components)

    def entities(self) -> tuple[EntityId, ...]:
        return tuple(self._alive)

    def alive(self, entity_id: EntityId) -> bool:
        return entity_id in self._alive

    def clear(self) -> None:
        """Despawn everything. Ids keep counting upward."""
        self._alive.clear()
        self._components.clear()

    def __len__(self) -> int:
        return len(self._alive)
