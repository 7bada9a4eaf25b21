import bcrypt

from src.libs.result import Error, Result, Return

MIN_PASSWORD_BYTES = 8
MAX_PASSWORD_BYTES = 72  # bcrypt rejects anything past 72 bytes


def validate_password(password: str) -> Result[None]:
    size = len(password.encode())
    if size < MIN_PASSWORD_BYTES:
        return Return.err(
            Error(
                "FAILED_VALIDATION",
                "Password must be at least 8 bytes long",
                {"password": "must be at least 8 bytes long"},
            )
        )
    if size > MAX_PASSWORD_BYTES:
        return Return.err(
            Error(
                "FAILED_VALIDATION",
                "Password must not be more than 72 bytes long",
                {"password": "must not be more than 72 bytes long"},
            )
        )
    return Return.ok(None)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(12)).decode()
