import pytest

from s3dispatch.context import RegistryScope


@pytest.fixture
def registry():
    """Provide an empty registry as the current registry for the duration of a test."""
    with RegistryScope() as registry:
        yield registry
