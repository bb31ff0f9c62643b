"""Unit tests for platform availability."""

from __future__ import annotations

from starflight.platform import (
    AlwaysAvailable,
    AvailabilityChecker,
    AvailabilityResult,
    PlatformAvailability,
)


class TestAvailabilityResult:
    def test_available(self) -> None:
        result = AvailabilityResult.available()
        assert result.is_available is True
        assert result.resolution_code is None
        assert result.user_resolvable is False

    def test_unavailable(self) -> None:
        result = AvailabilityResult(
            PlatformAvailability.SERVICE_VERSION_UPDATE_REQUIRED, resolution_code=2, user_resolvable=True
        )
        assert result.is_available is False
        assert result.user_resolvable is True

    def test_status_values_are_strings(self) -> None:
        assert PlatformAvailability.SERVICE_MISSING == "SERVICE_MISSING"


class TestAlwaysAvailable:
    def test_satisfies_port(self) -> None:
        assert isinstance(AlwaysAvailable(), AvailabilityChecker)

    def test_check(self) -> None:
        assert AlwaysAvailable().check().is_available
