"""
Authentication Use Cases

Bearer-token authentication and token issuance.
"""

from .authenticate_use_case import AuthenticateUseCase
from .create_authentication_token_use_case import CreateAuthenticationTokenUseCase
from .create_activation_token_use_case import CreateActivationTokenUseCase
from .create_password_reset_token_use_case import CreatePasswordResetTokenUseCase
from .dtos import (
    AuthenticationTokenInfo,
    AuthenticationTokenResponse,
    EmailNotification,
    TokenIssuedResponse,
)

__all__ = [
    # Use Cases
    "AuthenticateUseCase",
    "CreateAuthenticationTokenUseCase",
    "CreateActivationTokenUseCase",
    "CreatePasswordResetTokenUseCase",
    # DTOs
    "AuthenticationTokenInfo",
    "AuthenticationTokenResponse",
    "EmailNotification",
    "TokenIssuedResponse",
]
