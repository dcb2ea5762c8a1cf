# =============================================================================
# lib/place_store.py - Place Store Implementations
# =============================================================================
# Durable CRUD for Place records. The store is the single source of truth;
# the place service keeps no cache of its own.
#
# Both implementations enforce the (owner_id, name, address) unique
# constraint themselves and raise DuplicatePlaceError when it would be
# violated, so a race between the service's uniqueness check and the write
# can never produce a duplicate row.
#
# - InMemoryPlaceStore: process-local, used in development and tests
# - SupabasePlaceStore: backed by the Supabase `places` table
#
# Usage:
#   store = InMemoryPlaceStore()
#   place = store.create_place(owner_id, PlaceFields(name="...", address="..."))
# =============================================================================

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from core.models.place import Place, PlaceFields
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import ApplicationError, normalize_uuid

logger = logging.getLogger(__name__)


class DuplicatePlaceError(ApplicationError):
    """Raised when an owner already has a place with this name and address."""

    def __init__(self, owner_id: UUID | str, name: str, address: str):
        super().__init__(
            message=f"Place already exists: {name} at {address}",
            code="DUPLICATE_PLACE",
            suggestion="Use a different name or address, or edit the existing place",
            details={"owner_id": normalize_uuid(owner_id), "name": name, "address": address},
        )


class PlaceStore(ABC):
    """Persistence interface the place service depends on."""

    @abstractmethod
    def list_places(self) -> list[Place]: ...

    @abstractmethod
    def get_place(self, place_id: str) -> Place | None: ...

    @abstractmethod
    def find_place(self, owner_id: UUID | str, name: str, address: str) -> Place | None: ...

    @abstractmethod
    def create_place(self, owner_id: UUID | str, fields: PlaceFields) -> Place: ...

    @abstractmethod
    def update_place(self, place_id: str, fields: PlaceFields) -> Place | None: ...

    @abstractmethod
    def delete_place(self, place_id: str) -> bool: ...

    @abstractmethod
    def count(self) -> int: ...


# =============================================================================
# In-Memory Store
# =============================================================================

class InMemoryPlaceStore(PlaceStore):
    """
    Process-local place store.

    Places live in a dict keyed by id, with a second dict acting as the
    unique (owner_id, name, address) index. All reads and writes happen under
    one lock, so check-and-insert is atomic.
    """

    def __init__(self) -> None:
        self._places: dict[str, Place] = {}
        self._unique: dict[tuple[str, str, str], str] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _key(owner_id: UUID | str, name: str, address: str) -> tuple[str, str, str]:
        return (str(owner_id), name, address)

    def list_places(self) -> list[Place]:
        with self._lock:
            return list(self._places.values())

    def get_place(self, place_id: str) -> Place | None:
        with self._lock:
            return self._places.get(str(place_id))

    def find_place(self, owner_id: UUID | str, name: str, address: str) -> Place | None:
        with self._lock:
            place_id = self._unique.get(self._key(owner_id, name, address))
            return self._places.get(place_id) if place_id else None

    def create_place(self, owner_id: UUID | str, fields: PlaceFields) -> Place:
        key = self._key(owner_id, fields.name, fields.address)
        now = datetime.now(timezone.utc)

        with self._lock:
            if key in self._unique:
                raise DuplicatePlaceError(owner_id, fields.name, fields.address)

            place = Place(
                id=str(uuid4()),
                name=fields.name,
                description=fields.description,
                address=fields.address,
                owner_id=owner_id,
                created_at=now,
                updated_at=now,
            )
            self._places[place.id] = place
            self._unique[key] = place.id

        logger.debug(f"Stored place {place.id} in memory")
        return place

    def update_place(self, place_id: str, fields: PlaceFields) -> Place | None:
        with self._lock:
            current = self._places.get(str(place_id))
            if current is None:
                return None

            old_key = self._key(current.owner_id, current.name, current.address)
            new_key = self._key(current.owner_id, fields.name, fields.address)
            holder = self._unique.get(new_key)
            if holder is not None and holder != current.id:
                raise DuplicatePlaceError(current.owner_id, fields.name, fields.address)

            updated = current.model_copy(update={
                "name": fields.name,
                "description": fields.description,
                "address": fields.address,
                "updated_at": datetime.now(timezone.utc),
            })
            del self._unique[old_key]
            self._unique[new_key] = updated.id
            self._places[updated.id] = updated
            return updated

    def delete_place(self, place_id: str) -> bool:
        with self._lock:
            place = self._places.pop(str(place_id), None)
            if place is None:
                return False
            del self._unique[self._key(place.owner_id, place.name, place.address)]
            return True

    def count(self) -> int:
        with self._lock:
            return len(self._places)


# =============================================================================
# Supabase Store
# =============================================================================

class SupabasePlaceStore(PlaceStore):
    """
    Place store backed by the Supabase `places` table.

    Expects a unique index on (owner_id, name, address); Postgres unique
    violations surface as DuplicatePlaceError.
    """

    @staticmethod
    def _to_place(row: dict[str, Any] | None) -> Place | None:
        return Place.model_validate(row) if row else None

    @staticmethod
    def _payload(fields: PlaceFields) -> dict[str, Any]:
        return {
            "name": fields.name,
            "description": fields.description,
            "address": fields.address,
        }

    def list_places(self) -> list[Place]:
        return [Place.model_validate(row) for row in SupabaseClient.fetch_places()]

    def get_place(self, place_id: str) -> Place | None:
        return self._to_place(SupabaseClient.fetch_place(place_id))

    def find_place(self, owner_id: UUID | str, name: str, address: str) -> Place | None:
        return self._to_place(SupabaseClient.find_place(owner_id, name, address))

    def create_place(self, owner_id: UUID | str, fields: PlaceFields) -> Place:
        data = {**self._payload(fields), "owner_id": normalize_uuid(owner_id)}
        try:
            row = SupabaseClient.insert_place(data)
        except SupabaseClientError as e:
            if e.code == "UNIQUE_VIOLATION":
                raise DuplicatePlaceError(owner_id, fields.name, fields.address) from e
            raise
        return Place.model_validate(row)

    def update_place(self, place_id: str, fields: PlaceFields) -> Place | None:
        try:
            row = SupabaseClient.update_place(place_id, self._payload(fields))
        except SupabaseClientError as e:
            if e.code == "UNIQUE_VIOLATION":
                current = self.get_place(place_id)
                owner_id = current.owner_id if current else ""
                raise DuplicatePlaceError(owner_id, fields.name, fields.address) from e
            raise
        return self._to_place(row)

    def delete_place(self, place_id: str) -> bool:
        return SupabaseClient.delete_place(place_id)

    def count(self) -> int:
        return SupabaseClient.count_places()
