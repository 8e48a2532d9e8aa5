import logging

__version__ = "0.1.0"

from .auth import LOGIN_ATTEMPTS, login_or_raise
from .credentials import AppCredentials, Credentials, EnvCredentials, PathCredentials
from .endpoints import (
    check_parent_details,
    events_for_parent,
    messages,
    news_feed,
    personal_details,
    pst_cycles,
)
from .exceptions import (
    CompassAuthenticationError,
    CompassConfigurationError,
    CompassDownloadError,
    CompassException,
    CompassReadError,
    CompassRequestBuildError,
    CompassTransportError,
)
from .file_fetch import download_file, save_file
from .logger import setup_logger
from .session import SESSION_COOKIE, USER_AGENT, Compass

__all__ = [
    "PathCredentials",
    "EnvCredentials",
    "AppCredentials",
    "Credentials",
    "Compass",
    "USER_AGENT",
    "SESSION_COOKIE",
    "LOGIN_ATTEMPTS",
    "login_or_raise",
    "news_feed",
    "messages",
    "personal_details",
    "events_for_parent",
    "pst_cycles",
    "check_parent_details",
    "download_file",
    "save_file",
    "setup_logger",
    # Exceptions
    "CompassException",
    "CompassConfigurationError",
    "CompassRequestBuildError",
    "CompassTransportError",
    "CompassReadError",
    "CompassAuthenticationError",
    "CompassDownloadError",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
