# store/memory.py
"""
In-memory entity store for the job board.

The store holds the four entity collections (companies, admins, vacancies,
candidates) plus the business event log. It is owned by whoever builds it
(one per process, one per test) and is passed explicitly to commands.
There is no module-level state.

Entities are frozen dataclasses. Every change goes through
``Collection.update`` which stores a replaced copy, so a record handed out
by the store can never be used to mutate it behind the command layer's back.

The store knows nothing about tenants, roles or cascades: it never joins
across collections. Callers filter.

Usage:
    store = EntityStore()
    company = store.companies.insert(Company(id=None, name="Acme"))
    store.vacancies.filter(company_id=company.id, status=VacancyStatus.ACTIVE)

    with store.atomic():
        ...  # all-or-nothing: any exception restores every collection
"""

from __future__ import annotations

import dataclasses
import logging
import uuid
from contextlib import contextmanager
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


class DuplicateIdError(Exception):
    """Raised when inserting an entity whose explicit id is already taken."""

    def __init__(self, collection: str, entity_id: str):
        self.collection = collection
        self.entity_id = entity_id
        super().__init__(f"{collection}: id '{entity_id}' already exists.")


def new_id(prefix: str) -> str:
    """Generate a collection-unique id, e.g. ``comp_3f2a...``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class Collection(Generic[T]):
    """
    An id -> entity mapping with create/read/update/delete primitives.

    Lookups mimic a tiny subset of a Django manager: ``filter(**lookups)``
    matches attributes by equality and an optional predicate narrows further.
    """

    def __init__(self, name: str, id_prefix: str):
        self.name = name
        self.id_prefix = id_prefix
        self._rows: Dict[str, T] = {}

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._rows.values()))

    def __contains__(self, entity_id) -> bool:
        return entity_id in self._rows

    def insert(self, entity: T) -> T:
        """
        Add an entity, assigning a fresh id when it has none.

        Raises:
            DuplicateIdError: If the entity carries an id already in use
        """
        entity_id = getattr(entity, "id", None)
        if entity_id is None:
            entity_id = new_id(self.id_prefix)
            while entity_id in self._rows:
                entity_id = new_id(self.id_prefix)
            entity = dataclasses.replace(entity, id=entity_id)
        elif entity_id in self._rows:
            raise DuplicateIdError(self.name, entity_id)

        self._rows[entity_id] = entity
        return entity

    def get(self, entity_id) -> Optional[T]:
        if entity_id is None:
            return None
        return self._rows.get(entity_id)

    def all(self) -> List[T]:
        return list(self._rows.values())

    def filter(self, predicate: Optional[Callable[[T], bool]] = None, **lookups: Any) -> List[T]:
        rows = []
        for entity in self._rows.values():
            if any(getattr(entity, field) != value for field, value in lookups.items()):
                continue
            if predicate is not None and not predicate(entity):
                continue
            rows.append(entity)
        return rows

    def first(self, predicate: Optional[Callable[[T], bool]] = None, **lookups: Any) -> Optional[T]:
        rows = self.filter(predicate, **lookups)
        return rows[0] if rows else None

    def exists(self, predicate: Optional[Callable[[T], bool]] = None, **lookups: Any) -> bool:
        return bool(self.filter(predicate, **lookups))

    def count(self, predicate: Optional[Callable[[T], bool]] = None, **lookups: Any) -> int:
        return len(self.filter(predicate, **lookups))

    def update(self, entity_id, **changes: Any) -> Optional[T]:
        """Replace fields of an entity. Returns None when the id is unknown."""
        current = self._rows.get(entity_id)
        if current is None:
            return None
        changes.pop("id", None)
        updated = dataclasses.replace(current, **changes)
        self._rows[entity_id] = updated
        return updated

    def delete(self, entity_id) -> bool:
        """Remove an entity. Returns False when the id is unknown."""
        return self._rows.pop(entity_id, None) is not None

    def _snapshot(self) -> Dict[str, T]:
        return dict(self._rows)

    def _restore(self, rows: Dict[str, T]) -> None:
        self._rows = rows


class EntityStore:
    """
    Owned container for every job board collection.

    Attributes:
        companies: Company rows
        admins: Admin rows (tenant admins and super admins)
        vacancies: Vacancy rows
        candidates: Candidate rows
        events: Append-only list of BusinessEvent records
    """

    def __init__(self):
        self.companies: Collection = Collection("companies", "comp")
        self.admins: Collection = Collection("admins", "admin")
        self.vacancies: Collection = Collection("vacancies", "job")
        self.candidates: Collection = Collection("candidates", "cand")
        self.events: List[Any] = []
        self._atomic_depth = 0

    @property
    def collections(self) -> List[Collection]:
        return [self.companies, self.admins, self.vacancies, self.candidates]

    @contextmanager
    def atomic(self):
        """
        All-or-nothing block.

        If the block raises, every collection and the event log are put back
        to the state they had on entry, then the exception propagates.
        Nested blocks join the outermost one.
        """
        if self._atomic_depth:
            self._atomic_depth += 1
            try:
                yield self
            finally:
                self._atomic_depth -= 1
            return

        snapshots = [(collection, collection._snapshot()) for collection in self.collections]
        events_len = len(self.events)
        self._atomic_depth = 1
        try:
            yield self
        except BaseException:
            for collection, rows in snapshots:
                collection._restore(rows)
            del self.events[events_len:]
            logger.debug("Store block rolled back")
            raise
        finally:
            self._atomic_depth = 0

    def stats(self) -> Dict[str, int]:
        return {collection.name: len(collection) for collection in self.collections}
