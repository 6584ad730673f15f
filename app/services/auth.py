"""
Authentication Service

Login flow: credentials in, signed bearer token out.

1. Validate the body (username + password present)
2. Ask the identity store to check the password
3. Load the user's roles
4. Issue a token carrying the email, a unique token id, the user id and
   one role claim per role

A failed login answers 401 with the username echoed back. The response
never says whether the username or the password was wrong, and passwords
are never logged.
"""

import logging
from typing import Any

from app.repositories.identity import IdentityStore
from app.schemas import TokenResponse, UserLogin, UserLoginEcho
from app.services.responses import Outcome
from app.services.security import create_access_token
from app.services.validation import validate_shape

logger = logging.getLogger(__name__)

LOCATION = "Users-Login"


def authenticate(identity: IdentityStore, payload: Any) -> Outcome:
    """
    Verify credentials and issue a token.

    Args:
        identity: Identity store for the current request
        payload: Raw request body

    Returns:
        ok({"token": ...}), bad_request, unauthorized or internal_error
    """
    credentials, result = validate_shape(UserLogin, payload)
    if not result.is_valid:
        logger.warning(f"{LOCATION}: Data Was Incomplete: {result.errors}")
        return Outcome.bad_request(result.errors)

    username = credentials.username
    try:
        logger.info(f"{LOCATION}: Login attempt from user {username}")
        if not identity.check_password(username, credentials.password):
            logger.info(f"{LOCATION}: {username} Not Authenticated")
            return Outcome.unauthorized(UserLoginEcho(username=username))

        user = identity.find_by_name(username)
        if user is None:
            logger.error(f"{LOCATION}: {username} vanished after password check")
            return Outcome.internal_error()

        roles = identity.get_roles(user)
        token = create_access_token(user, roles)
        logger.info(f"{LOCATION}: {username} Successfully Authenticated with roles {roles}")
        return Outcome.ok(TokenResponse(token=token))
    except Exception:
        logger.exception(f"{LOCATION}: Login for {username} failed")
        return Outcome.internal_error()
