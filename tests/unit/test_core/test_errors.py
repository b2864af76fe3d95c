"""Unit tests for the error taxonomy."""

from shelter_nav.core.errors import (
    IncompleteAddressError,
    NetworkFailureError,
    NoDataFoundError,
    PermissionDeniedError,
    SensorUnsupportedError,
    ShelterNavError,
)


class TestErrors:
    def test_message_preserved(self) -> None:
        error = NoDataFoundError("No shelter data was found for this area")
        assert error.message == "No shelter data was found for this area"
        assert str(error) == error.message

    def test_network_failure_prefixes_provider(self) -> None:
        error = NetworkFailureError("nominatim", "Provider returned HTTP 503", 503)
        assert error.message == "nominatim: Provider returned HTTP 503"
        assert error.provider_name == "nominatim"
        assert error.status_code == 503

    def test_network_failure_status_optional(self) -> None:
        assert NetworkFailureError("catalog", "timed out").status_code is None

    def test_hierarchy(self) -> None:
        for cls in (SensorUnsupportedError, PermissionDeniedError, NoDataFoundError, IncompleteAddressError):
            assert issubclass(cls, ShelterNavError)
        assert isinstance(NetworkFailureError("x", "y"), ShelterNavError)
