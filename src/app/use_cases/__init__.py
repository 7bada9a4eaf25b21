"""
Use Cases

Organized by resource:
- auth/: Token issuance and request authentication
- users/: Registration, activation, password reset
- movies/: Catalogue CRUD with version-checked updates
"""

from .auth import (
    AuthenticateUseCase,
    CreateActivationTokenUseCase,
    CreateAuthenticationTokenUseCase,
    CreatePasswordResetTokenUseCase,
)
from .users import (
    ActivateUserUseCase,
    RegisterUserUseCase,
    UpdatePasswordUseCase,
)
from .movies import (
    CreateMovieUseCase,
    DeleteMovieUseCase,
    ListMoviesUseCase,
    ShowMovieUseCase,
    UpdateMovieUseCase,
)

__all__ = [
    # Auth
    "AuthenticateUseCase",
    "CreateActivationTokenUseCase",
    "CreateAuthenticationTokenUseCase",
    "CreatePasswordResetTokenUseCase",
    # Users
    "ActivateUserUseCase",
    "RegisterUserUseCase",
    "UpdatePasswordUseCase",
    # Movies
    "CreateMovieUseCase",
    "DeleteMovieUseCase",
    "ListMoviesUseCase",
    "ShowMovieUseCase",
    "UpdateMovieUseCase",
]
