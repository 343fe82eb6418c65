from asgi_lifespan import LifespanManager
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from database import models
from database.models import Review, init_database
from main import app


async def test_lifespan_initializes_and_closes_database():
    mock = AsyncMongoMockClient()
    await init_database(mock)

    async with LifespanManager(app) as manager:
        # startup keeps the injected client instead of dialing MONGODB_URI
        assert models.get_client() is mock
        transport = ASGITransport(app=manager.app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            resp = await ac.get("/health")
            assert resp.status_code == 200
            assert resp.json() == {"status": "healthy"}

            resp = await ac.get("/api/reviews")
            assert resp.status_code == 200
            assert resp.json() == {"reviews": [], "totalPages": 0}

        assert await Review.find_all().count() == 0

    assert models._client is None


async def test_root(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True
