"""Generic database utility functions for Supabase interactions."""

import logging
from typing import Any

from supabase import Client

from src.usersync.services.database.connection import get_supabase_admin_client

logger = logging.getLogger(__name__)


class SupabaseQueryBuilder:
    """Helper class for building and executing Supabase queries."""

    def __init__(self, client: Client | None = None) -> None:
        """
        Initialize query builder.

        Args:
            client: Supabase client instance (uses admin client if None)
        """
        self.client = client or get_supabase_admin_client()

    def insert_record(self, table: str, data: dict[str, Any]) -> dict[str, Any] | None:
        """
        Insert a single record.

        Args:
            table: Table name
            data: Record data dictionary

        Returns:
            Inserted record dictionary or None if nothing was returned

        Raises:
            Exception: If insert operation fails

        Example:
            >>> builder = SupabaseQueryBuilder()
            >>> user = builder.insert_record(
            ...     "users",
            ...     {"clerk_id": "user_2abc", "email": "a@example.com", "username": "ada"}
            ... )
        """
        try:
            response = self.client.table(table).insert(data).execute()
            return response.data[0] if response.data else None
        except Exception as e:
            logger.error(f"Failed to insert record in {table}: {e}")
            raise

    def update_by_filter(
        self, table: str, filters: dict[str, Any], data: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """
        Update records matching filters.

        Args:
            table: Table name
            filters: Dictionary of field:value pairs for filtering
            data: Fields to update

        Returns:
            List of updated record dictionaries

        Example:
            >>> builder = SupabaseQueryBuilder()
            >>> updated = builder.update_by_filter(
            ...     "users",
            ...     {"clerk_id": "user_2abc"},
            ...     {"first_name": "Ada"}
            ... )
        """
        query = self.client.table(table).update(data)

        for field, value in filters.items():
            query = query.eq(field, value)

        response = query.execute()
        return response.data

    def delete_by_filter(self, table: str, filters: dict[str, Any]) -> list[dict[str, Any]]:
        """
        Delete records matching filters.

        Args:
            table: Table name
            filters: Dictionary of field:value pairs for filtering

        Returns:
            List of deleted record dictionaries (empty if nothing matched)

        Example:
            >>> builder = SupabaseQueryBuilder()
            >>> deleted = builder.delete_by_filter("users", {"clerk_id": "user_2abc"})
        """
        query = self.client.table(table).delete()

        for field, value in filters.items():
            query = query.eq(field, value)

        response = query.execute()
        return response.data


def get_query_builder(client: Client | None = None) -> SupabaseQueryBuilder:
    """
    Get instance of SupabaseQueryBuilder.

    Args:
        client: Optional Supabase client (uses admin client if None)

    Returns:
        SupabaseQueryBuilder instance

    Example:
        >>> db = get_query_builder()
        >>> deleted = db.delete_by_filter("users", {"clerk_id": "user_2abc"})
    """
    return SupabaseQueryBuilder(client)
