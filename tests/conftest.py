import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("ENV", "test")

pytest_plugins = [
    "tests.fixtures.report_action_fixtures",
]


@pytest.fixture(scope="function")
def client():
    """API client in testing mode."""
    from app.main import create_app

    app = create_app(testing=True)
    with TestClient(app) as c:
        yield c
