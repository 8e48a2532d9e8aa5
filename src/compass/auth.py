"""Login policy applied by callers of `Compass.login`.

The portal sits behind a bot-mitigation layer that may swallow the first
authentication request while still answering 200, so a login is attempted a
fixed number of times before giving up.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import CompassAuthenticationError, CompassException

if TYPE_CHECKING:  # pragma: no cover
    from .session import Compass

__all__ = ["LOGIN_ATTEMPTS", "login_or_raise"]

logger = logging.getLogger(__name__)

LOGIN_ATTEMPTS = 2


def login_or_raise(client: Compass, attempts: int = LOGIN_ATTEMPTS) -> None:
    """Log in, retrying up to `attempts` calls in total.

    Args:
        client: Session client to authenticate
        attempts: Total number of login calls allowed

    Raises:
        CompassAuthenticationError: If every attempt completed without a session cookie
        CompassException: The error raised by the final attempt, if it failed with one
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    last_error: CompassException | None = None
    for attempt in range(1, attempts + 1):
        try:
            if client.login():
                logger.info(f"Logged in to {client.creds.hostname} on attempt {attempt}")
                return
            last_error = None
            logger.warning(f"Login attempt {attempt}/{attempts} did not establish a session")
        except CompassException as e:
            last_error = e
            logger.warning(f"Login attempt {attempt}/{attempts} failed: {e}")

    if last_error is not None:
        raise last_error
    raise CompassAuthenticationError(f"Login failed for {client.creds.username} after {attempts} attempts")
