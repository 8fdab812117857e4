"""
Person API: Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── write_csv:     Writes lines to a temporary CSV file, returns its path
    ├── sample_csv:    Two-person CSV file (Müller, Petersen)
    ├── person_store:  PersonStore loaded from sample_csv
    └── test_client:   HTTPX AsyncClient bound to an app using person_store
"""

import os

# Settings are read at import time; keep tests quiet and off the sample data
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from person_api.services.person_store import PersonStore


SAMPLE_LINES = [
    "Müller, Hans, 67742 Lauterecken, 1",
    "Petersen, Peter, 18439 Stralsund, 2",
]


@pytest.fixture
def write_csv(tmp_path):
    """
    Factory writing one line per entry (each newline-terminated).

    Usage:
        path = write_csv("Müller, Hans, 67742 Lauterecken, 1", "Bart, Bertram")
    """
    counter = {"n": 0}

    def _write(*lines: str, trailing_newline: bool = True):
        counter["n"] += 1
        path = tmp_path / f"persons_{counter['n']}.csv"
        content = "\n".join(lines)
        if lines and trailing_newline:
            content += "\n"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_csv(write_csv):
    return write_csv(*SAMPLE_LINES)


@pytest.fixture
def person_store(sample_csv):
    return PersonStore(sample_csv)


@pytest_asyncio.fixture
async def test_client(person_store):
    """
    Async HTTP client talking to a fresh app backed by `person_store`.

    ASGITransport does not run the lifespan, so the store is attached to
    app.state directly.
    """
    from person_api.main import create_app

    app = create_app()
    app.state.person_store = person_store
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
