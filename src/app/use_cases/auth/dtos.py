"""
Authentication Use Case DTOs (Data Transfer Objects)

Response classes for the token domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel


class EmailNotification(BaseModel):
    """Email to be delivered after the response is sent"""

    recipient: str
    template: str
    data: Dict[str, Any]


# ============================================================================
# Response DTOs
# ============================================================================


class AuthenticationTokenInfo(BaseModel):
    """Issued bearer token"""

    token: str
    expiry: datetime


class AuthenticationTokenResponse(BaseModel):
    """Response for create authentication token use case"""

    authentication_token: AuthenticationTokenInfo


class TokenIssuedResponse(BaseModel):
    """Response for token requests delivered by email"""

    message: str
    notification: EmailNotification
