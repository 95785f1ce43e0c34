"""Database connection, models and user data access."""

from src.usersync.services.database.connection import get_supabase_admin_client
from src.usersync.services.database.exceptions import MissingExternalIdError, UserNotFoundError
from src.usersync.services.database.models import UserCreate, UserUpdate
from src.usersync.services.database.users import UserRepository
from src.usersync.services.database.utils import SupabaseQueryBuilder, get_query_builder

__all__ = [
    "get_supabase_admin_client",
    "SupabaseQueryBuilder",
    "get_query_builder",
    "UserRepository",
    "UserCreate",
    "UserUpdate",
    "MissingExternalIdError",
    "UserNotFoundError",
]
