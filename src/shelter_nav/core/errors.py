"""Error taxonomy shared by the resolver, repository, sensors, and session.

``NetworkFailureError`` and ``IncompleteAddressError`` are recoverable: the
region resolver and shelter repository absorb them and move on to the next
strategy or category.  The session surfaces anything that escapes as a
terminal failure.
"""


class ShelterNavError(Exception):
    """Base class for all shelter navigation errors.

    Args:
        message: Human-readable description, suitable for display.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class SensorUnsupportedError(ShelterNavError):
    """The device cannot provide location or orientation readings."""


class PermissionDeniedError(ShelterNavError):
    """The user refused access to location or orientation readings."""


class NetworkFailureError(ShelterNavError):
    """Raised when an external provider fails at the transport or service level.

    Distinguishes provider failures (timeout, HTTP error, connection error,
    unparseable body) from a successful response with no usable data.

    Args:
        provider_name: Name of the failing provider.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the provider.
    """

    def __init__(self, provider_name: str, message: str, status_code: int | None = None) -> None:
        self.provider_name = provider_name
        self.status_code = status_code
        super().__init__(f"{provider_name}: {message}")


class NoDataFoundError(ShelterNavError):
    """Every path for the attempted lookup was exhausted without a result."""


class IncompleteAddressError(ShelterNavError):
    """A reverse-geocoded address lacks the city or prefecture names needed for lookup."""
