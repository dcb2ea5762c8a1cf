# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for the `places` table:
# - Fetching one place, all places, or the place matching an owner/name/address
# - Inserting, updating and deleting place rows
#
# Rows are returned as plain dicts; lib/place_store.py turns them into
# Place models.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   row = SupabaseClient.fetch_place(place_id)
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST / Postgres error codes we care about
NO_ROWS = "PGRST116"
UNIQUE_VIOLATION = "23505"
INVALID_TEXT_REPRESENTATION = "22P02"


def _has_code(error: Exception, code: str) -> bool:
    """Check whether a PostgREST error carries the given code."""
    return getattr(error, "code", None) == code


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages: errors should tell HOW to fix,
    not just WHAT failed.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        row = SupabaseClient.find_place(owner_id, "Cafe Lingo", "68 Jay Street")
        if row:
            print(row["id"])
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        Ownership is enforced by the place service instead.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def _table(cls):
        return cls.get_client().table(settings.PLACES_TABLE)

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_place(cls, place_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a place by ID.

        Args:
            place_id: The place ID

        Returns:
            Place row, or None if not found (including malformed IDs)

        Raises:
            SupabaseClientError: If query fails
        """
        place_id_str = normalize_uuid(place_id)

        try:
            response = (
                cls._table()
                .select("*")
                .eq("id", place_id_str)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            # No rows, or an id that isn't even a valid uuid
            if _has_code(e, NO_ROWS) or _has_code(e, INVALID_TEXT_REPRESENTATION):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch place: {e}",
                code="FETCH_PLACE_FAILED",
                suggestion="Check that the places table is accessible",
                details={"place_id": place_id_str}
            )

    @classmethod
    def fetch_places(cls) -> list[dict[str, Any]]:
        """
        Fetch every place, oldest first.

        Raises:
            SupabaseClientError: If query fails
        """
        try:
            response = (
                cls._table()
                .select("*")
                .order("created_at")
                .execute()
            )
            places = response.data or []
            logger.debug(f"Fetched {len(places)} places")
            return places

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch places: {e}",
                code="FETCH_PLACES_FAILED",
                suggestion="Check that the places table is accessible",
            )

    @classmethod
    def find_place(
        cls,
        owner_id: str | UUID,
        name: str,
        address: str,
    ) -> dict[str, Any] | None:
        """
        Find the place an owner has registered under this name and address.

        Args:
            owner_id: The owner's user ID
            name: Exact place name
            address: Exact place address

        Returns:
            Place row, or None if the owner has no such place

        Raises:
            SupabaseClientError: If query fails
        """
        owner_id_str = normalize_uuid(owner_id)

        try:
            response = (
                cls._table()
                .select("*")
                .eq("owner_id", owner_id_str)
                .eq("name", name)
                .eq("address", address)
                .limit(1)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to look up place: {e}",
                code="FIND_PLACE_FAILED",
                details={"owner_id": owner_id_str, "name": name, "address": address}
            )

    @classmethod
    def count_places(cls) -> int:
        """Count all place rows."""
        try:
            response = (
                cls._table()
                .select("id", count="exact")
                .execute()
            )
            return response.count or 0

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count places: {e}",
                code="COUNT_PLACES_FAILED",
            )

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    @classmethod
    def insert_place(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a new place row.

        Args:
            data: Column values (name, description, address, owner_id)

        Returns:
            Inserted row with generated id and timestamps

        Raises:
            SupabaseClientError: code UNIQUE_VIOLATION if the owner already
                has a place with this name and address, otherwise a generic
                insert failure
        """
        try:
            response = (
                cls._table()
                .insert(data)
                .execute()
            )

            if response.data:
                row = response.data[0]
                logger.info(f"Inserted place: {row['id']} for owner: {data.get('owner_id')}")
                return row
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            if _has_code(e, UNIQUE_VIOLATION):
                raise SupabaseClientError(
                    message="Place already exists for this owner",
                    code="UNIQUE_VIOLATION",
                    details={"owner_id": data.get("owner_id")}
                )
            raise SupabaseClientError(
                message=f"Failed to insert place: {e}",
                code="INSERT_PLACE_FAILED",
                details={"owner_id": data.get("owner_id")}
            )

    @classmethod
    def update_place(
        cls,
        place_id: str | UUID,
        data: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update a place row.

        `updated_at` is stamped automatically.

        Returns:
            Updated row, or None if no row has this ID

        Raises:
            SupabaseClientError: code UNIQUE_VIOLATION on a duplicate
                name/address for the same owner
        """
        place_id_str = normalize_uuid(place_id)
        update_data = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}

        try:
            response = (
                cls._table()
                .update(update_data)
                .eq("id", place_id_str)
                .execute()
            )

            if response.data:
                logger.info(f"Updated place: {place_id_str}")
                return response.data[0]
            return None

        except Exception as e:
            if _has_code(e, UNIQUE_VIOLATION):
                raise SupabaseClientError(
                    message="Place already exists for this owner",
                    code="UNIQUE_VIOLATION",
                    details={"place_id": place_id_str}
                )
            if _has_code(e, INVALID_TEXT_REPRESENTATION):
                return None
            raise SupabaseClientError(
                message=f"Failed to update place: {e}",
                code="UPDATE_PLACE_FAILED",
                details={"place_id": place_id_str}
            )

    @classmethod
    def delete_place(cls, place_id: str | UUID) -> bool:
        """
        Delete a place row.

        Returns:
            True if a row was deleted
        """
        place_id_str = normalize_uuid(place_id)

        try:
            response = (
                cls._table()
                .delete()
                .eq("id", place_id_str)
                .execute()
            )
            deleted = bool(response.data)
            if deleted:
                logger.info(f"Deleted place: {place_id_str}")
            return deleted

        except Exception as e:
            if _has_code(e, INVALID_TEXT_REPRESENTATION):
                return False
            raise SupabaseClientError(
                message=f"Failed to delete place: {e}",
                code="DELETE_PLACE_FAILED",
                details={"place_id": place_id_str}
            )
