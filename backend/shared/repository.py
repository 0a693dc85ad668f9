"""
Base repository class for database access.

Provides a common abstraction layer for Supabase-backed repositories.
"""

from typing import Optional, TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - A per-repository table name, overridable at construction time
    - Generic type parameter for model type hints

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally.

    Example:
        class SupabaseUserDirectory(BaseRepository[User]):
            table_name = "users"

            async def find_by_id(self, user_id: str) -> Optional[User]:
                result = self._table().select("*").eq("id", user_id).execute()
                if not result.data:
                    return None
                return self._map_to_user(result.data[0])
    """

    table_name: str = ""

    def __init__(self, db: Client, table_name: Optional[str] = None) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
            table_name: Overrides the class-level table name.
        """
        self._db = db
        if table_name:
            self.table_name = table_name

    def _table(self):
        """Query builder bound to this repository's table."""
        return self._db.table(self.table_name)
