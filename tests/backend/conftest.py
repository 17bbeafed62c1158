import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from app.core import db as db_module
from app.main import app
from app.models.interview import Interview


TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    """
    Fresh database without the HTTP layer (for store / pipeline tests).
    """
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client():
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    await _init_test_db()
    # Use ASGITransport without lifespan parameter (not supported in all httpx versions)
    try:
        transport = ASGITransport(app=app, lifespan="off")
    except TypeError:
        # Fallback for httpx versions that don't support lifespan parameter
        transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    await Tortoise.close_connections()


@pytest.fixture
def question_timestamps():
    return [
        {"questionId": "q1", "timestampMs": 0},
        {"questionId": "q2", "timestampMs": 2000},
        {"questionId": "q3", "timestampMs": 5000},
    ]


@pytest_asyncio.fixture
async def create_interview():
    """
    Factory fixture to create interviews directly via ORM.
    """

    async def _create_interview(**overrides) -> Interview:
        fields = {
            "child_name": "Test Child",
            "year": 2025,
            "age": 5,
            "video_uri": "/tmp/interview.mp4",
            "question_timestamps": [
                {"questionId": "q1", "timestampMs": 0},
                {"questionId": "q2", "timestampMs": 2000},
                {"questionId": "q3", "timestampMs": 5000},
            ],
        }
        fields.update(overrides)
        return await Interview.create(**fields)

    return _create_interview
