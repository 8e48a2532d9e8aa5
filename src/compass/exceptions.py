class CompassException(Exception):
    """Base exception class for Compass API errors."""
    pass

class CompassConfigurationError(CompassException):
    """Indicates missing or invalid credentials."""
    pass

class CompassRequestBuildError(CompassException):
    """Indicates a request could not be constructed (bad URL, header or body)."""
    pass

class CompassTransportError(CompassException):
    """Indicates the network call failed (DNS, connection, TLS, timeout)."""
    pass

class CompassReadError(CompassException):
    """Indicates the response body could not be fully read."""
    pass

class CompassAuthenticationError(CompassException):
    """Indicates every login attempt finished without a session cookie."""
    pass

class CompassDownloadError(CompassException):
    """Indicates an error occurred while saving a downloaded file."""
    pass
