"""
Greenlight Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import PermissionCode, TokenScope

# Export all entities
from .user import User
from .token import Token
from .permission import Permission, UserPermission
from .movie import Movie

__all__ = [
    # Enums
    "PermissionCode",
    "TokenScope",
    # Entities
    "User",
    "Token",
    "Permission",
    "UserPermission",
    "Movie",
]
