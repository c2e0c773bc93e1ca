import unittest

import mongomock
from bson import ObjectId
from fastapi.testclient import TestClient

from app.database.mongo import get_db
from app.main import app
from app.services.auth_service import create_access_token, hash_password


class ApiTestCase(unittest.TestCase):
    """Runs the app against an in-memory MongoDB."""

    def setUp(self):
        self.db = mongomock.MongoClient().db
        app.dependency_overrides[get_db] = lambda: self.db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def create_user(self, email="admin@esrent.com", role="admin", password="secret123",
                    is_active=True):
        # Inserted raw so tests can also seed roles the API never issues
        doc = {
            "_id": ObjectId(),
            "email": email,
            "name": "Test User",
            "password_hash": hash_password(password),
            "role": role,
            "is_active": is_active,
        }
        self.db.users.insert_one(doc)
        return doc

    def auth_headers(self, user):
        token = create_access_token(str(user["_id"]), user["email"], user["role"])
        return {"Authorization": f"Bearer {token}"}

    def admin_headers(self, role="admin"):
        return self.auth_headers(self.create_user(email=f"{role}@esrent.com", role=role))


def car_payload(**overrides):
    payload = {
        "brand": "Lamborghini",
        "model": "Huracan",
        "name": "Lamborghini Huracan EVO",
        "year": 2023,
        "transmission": "Automatic",
        "fuel": "Petrol",
        "mileage": 1200,
        "dailyPrice": 2500,
        "discountedPrice": 2200,
        "images": ["https://cdn.esrent.test/huracan.jpg"],
        "description": "V10 supercar",
        "features": ["Carbon ceramic brakes"],
        "category": "Sports",
        "engine": "5.2L V10",
        "power": "631 hp",
        "tags": ["supercar"],
        "seater": 2,
        "featured": True,
        "available": True,
    }
    payload.update(overrides)
    return payload
