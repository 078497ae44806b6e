import pytest
from fastapi.testclient import TestClient

from main import app
from polyline_codec.schemas.common import Coordinate

# Reference path from the format documentation
REFERENCE_POINTS = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]
REFERENCE_POLYLINE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def reference_path():
    return [Coordinate(latitude=lat, longitude=lon) for lat, lon in REFERENCE_POINTS]
