"""Shared fixtures: users, signed-in clients and fake gateways."""

from __future__ import annotations

import pytest
from django.contrib.auth.hashers import make_password

from CVapp import views
from CVapp.schemas import CVRecord
from CVapp.services import CVStoreGateway, EnhancementGateway
from users.models import User


JANE_CV = {
    "name": "Jane Doe",
    "contact": {"email": "j@x.com", "linkedin": "https://li/jane", "phone": "555"},
    "skills": ["Go"],
    "technologies": ["SQL"],
    "experience": [{"title": "Eng", "company": "Acme", "years": "2020-2023"}],
    "education": [{"degree": "BSc", "school": "MIT", "year": "2019"}],
}


class FakeCVStore(CVStoreGateway):
    def __init__(self, record=None, error=None):
        self.record = record
        self.error = error
        self.calls = []

    def load_cv(self, user_id):
        self.calls.append(user_id)
        if self.error is not None:
            raise self.error
        return self.record


class FakeEnhancer(EnhancementGateway):
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def enhance(self, record):
        self.calls.append(record)
        if self.error is not None:
            raise self.error
        return self.result if self.result is not None else record


class FakeUser:
    def __init__(self, id):
        self.id = id


@pytest.fixture
def jane_cv() -> CVRecord:
    return CVRecord.model_validate(JANE_CV)


@pytest.fixture
def enhanced_jane_cv() -> CVRecord:
    data = dict(JANE_CV, skills=["Go (Golang)", "Go"], technologies=["PostgreSQL"])
    return CVRecord.model_validate(data)


@pytest.fixture
def user(db) -> User:
    return User.objects.create(
        username="jane",
        first_name="Jane",
        last_name="Doe",
        email="j@x.com",
        password=make_password("secret"),
    )


@pytest.fixture
def signed_in_client(client, user):
    session = client.session
    session["user_id"] = user.id
    session.save()
    return client


@pytest.fixture
def cv_store(monkeypatch) -> FakeCVStore:
    store = FakeCVStore()
    monkeypatch.setattr(views, "_cv_store", store)
    return store


@pytest.fixture
def enhancer(monkeypatch) -> FakeEnhancer:
    fake = FakeEnhancer()
    monkeypatch.setattr(views, "_enhancement_service", fake)
    return fake
