"""
Greenlight Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class TokenScope(str, Enum):
    """Purpose a token was issued for"""

    authentication = "authentication"
    activation = "activation"
    password_reset = "password-reset"


class PermissionCode(str, Enum):
    """Permission codes checked by the movie endpoints"""

    movies_read = "movies:read"
    movies_write = "movies:write"
