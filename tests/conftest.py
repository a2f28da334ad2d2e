import pytest

from brewcalc.conversions.service import ConversionService


@pytest.fixture
def service():
    """Default, non-strict conversion service."""
    return ConversionService()


@pytest.fixture
def strict_service():
    """Conversion service that rejects out-of-domain inputs."""
    return ConversionService(strict=True)
