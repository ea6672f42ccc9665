import pytest

import statements.builders  # noqa: F401  (registers built-in builders)
from statements.core import PlatformConfig

from statements.tests.fixtures import RecordingTransport


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def config(transport) -> PlatformConfig:
    return PlatformConfig(platform="acme", transport=transport)
