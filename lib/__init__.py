# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - security.py: bcrypt password hashing
# - utils.py: Shared utilities (ID parsing, blank checks)
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError, create_supabase_client
from lib.security import hash_password, verify_password
from lib.utils import is_blank, parse_id

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    "create_supabase_client",
    # Security
    "hash_password",
    "verify_password",
    # Utils
    "is_blank",
    "parse_id",
]
