"""Shared fixtures: in-memory Mongo, ASGI client, payload factories."""

import os

# Keep the suite away from any real deployment settings
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("REVIEWS_DEBUG_ECHO", "false")

from datetime import datetime, timedelta, timezone
from typing import AsyncIterator

import jwt
import pytest
from asgi_lifespan import LifespanManager
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from config.variable import JWT_SECRET_KEY
from database.models import Review, init_database
from main import app


@pytest.fixture
async def db():
    # Fresh in-memory database for every test
    await init_database(AsyncMongoMockClient())
    yield


@pytest.fixture
async def client(db) -> AsyncIterator[AsyncClient]:
    # Startup reuses the mock client installed by `db`; shutdown closes it
    async with LifespanManager(app) as manager:
        transport = ASGITransport(app=manager.app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            yield ac


@pytest.fixture
def review_payload():
    def make(**overrides):
        payload = {
            "name": "Jane",
            "email": "J@X.COM",
            "subject": "Hi",
            "message": "Great work",
            "rating": 5,
            "termsAccepted": True,
            "userType": "General",
        }
        payload.update(overrides)
        return payload
    return make


@pytest.fixture
async def seeded_reviews(db):
    """Five reviews, review-0 oldest and review-4 newest"""
    base = datetime(2024, 1, 1, 12, 0, 0)
    reviews = []
    for i in range(5):
        review = Review(
            name=f"review-{i}",
            email=f"user{i}@example.com",
            subject=f"Subject {i}",
            message="Loved the delivery" if i % 2 == 0 else "Solid communication",
            rating=(i % 5) + 1,
            terms_accepted=True,
            user_type="Client" if i == 3 else "General",
            user_id="client-3" if i == 3 else None,
            rank_and_position="CTO, Acme" if i == 3 else "",
            status=True if i < 2 else None,
            created_at=base + timedelta(minutes=i),
        )
        await review.insert()
        reviews.append(review)
    return reviews


def make_token(user_id: str, email: str = "owner@example.com", token_type: str = "access") -> str:
    payload = {
        "user_id": user_id,
        "email": email,
        "type": token_type,
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm="HS256")


@pytest.fixture
def auth_headers():
    def make(user_id: str = "owner-1"):
        return {"Authorization": f"Bearer {make_token(user_id)}"}
    return make


@pytest.fixture
def project_payload():
    def make(**overrides):
        payload = {
            "title": "Dashboard rewrite",
            "author": "owner-1",
            "client": "Acme",
            "description": "Rebuild the admin dashboard on the new API",
            "category": "Fullstack",
            "slug": "dashboard-rewrite",
            "techStack": ["FastAPI", "MongoDB"],
            "milestones": [{"name": "Kickoff", "completed": True, "date": "2024-01-10"}],
            "startDate": "2024-01-01T00:00:00Z",
        }
        payload.update(overrides)
        return payload
    return make
