"""
Authorization Policies

A policy is an explicit ordered list of named checks run against the request
identity before a handler executes. The first failing check decides the
response, so the order encodes the requirements:

- activation requires a concrete (authenticated) identity
- a permission requires an activated identity
"""

import logging
from typing import Callable, List, NamedTuple

from src.domain.identity import UserIdentity
from src.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class PolicyCheck(NamedTuple):
    name: str
    check: Callable[[UserIdentity], Result[None]]


def _require_authenticated(identity: UserIdentity) -> Result[None]:
    if identity.is_anonymous:
        return Return.err(
            Error(
                "AUTHENTICATION_REQUIRED",
                "You must be authenticated to access this resource",
            )
        )
    return Return.ok(None)


def _require_activated(identity: UserIdentity) -> Result[None]:
    if identity.is_anonymous or not identity.activated:
        return Return.err(
            Error(
                "ACCOUNT_NOT_ACTIVATED",
                "Your user account must be activated to access this resource",
            )
        )
    return Return.ok(None)


authenticated = PolicyCheck("authenticated", _require_authenticated)
activated = PolicyCheck("activated", _require_activated)


def has_permission(code: str) -> PolicyCheck:
    """Build a check for membership of `code` in the identity's permissions"""

    def _check(identity: UserIdentity) -> Result[None]:
        if not identity.has_permission(code):
            return Return.err(
                Error(
                    "PERMISSION_DENIED",
                    "Your user account doesn't have the necessary permissions "
                    "to access this resource",
                )
            )
        return Return.ok(None)

    return PolicyCheck(f"has_permission:{code}", _check)


def activated_policy() -> List[PolicyCheck]:
    return [authenticated, activated]


def permission_policy(code: str) -> List[PolicyCheck]:
    return [authenticated, activated, has_permission(code)]


def authorize(identity: UserIdentity, policy: List[PolicyCheck]) -> Result[None]:
    """Run checks in order and return the first failure, if any"""
    for policy_check in policy:
        result = policy_check.check(identity)
        if result.is_err():
            logger.info(
                f"Authorization denied by {policy_check.name}: {result.error.code}"
            )
            return result
    return Return.ok(None)
