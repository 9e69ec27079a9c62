"""
Test configuration and fixtures.

Provides:
- In-memory SQLite database, schema recreated for every test
- TestClient wired to the test session and a temporary asset storage
- Factory helpers for users, forms, blocks, interactions, sessions, responses
"""
import os
import uuid
from datetime import datetime, timedelta, timezone

# must be set before formbuilder creates its engine
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from formbuilder import models
from formbuilder.app import app, get_db, get_storage
from formbuilder.database import Base, SessionLocal, engine
from formbuilder.storage import LocalStorage


def _id() -> str:
    return str(uuid.uuid4())


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def storage(tmp_path) -> LocalStorage:
    return LocalStorage(str(tmp_path))


@pytest.fixture(scope="function")
def client(db, storage):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


class Factory:
    def __init__(self, db):
        self.db = db

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def user(self, **attrs) -> models.User:
        attrs.setdefault("email", f"test-{uuid.uuid4().hex[:8]}@test.com")
        attrs.setdefault("api_token", uuid.uuid4().hex)
        return self._save(models.User(id=_id(), **attrs))

    def form(self, user=None, **attrs) -> models.Form:
        user = user or self.user()
        attrs.setdefault("name", "Contact form")
        attrs.setdefault("published_at", datetime.now(timezone.utc) - timedelta(days=1))
        return self._save(models.Form(id=_id(), user_id=user.id, **attrs))

    def block(self, form=None, block_type="none", **attrs) -> models.FormBlock:
        form = form or self.form()
        block_type = getattr(block_type, "value", block_type)
        return self._save(models.FormBlock(id=_id(), form_id=form.id, type=block_type, **attrs))

    def blocks(self, form, count, block_type="none"):
        return [self.block(form, block_type, sequence=i) for i in range(count)]

    def interaction(self, block=None, interaction_type="textarea", options=None, **attrs) -> models.FormBlockInteraction:
        block = block or self.block(block_type="input-long")
        interaction_type = getattr(interaction_type, "value", interaction_type)
        return self._save(
            models.FormBlockInteraction(
                id=_id(), form_block_id=block.id, type=interaction_type, uuid=_id(), options=options or {}, **attrs
            )
        )

    def session(self, form=None) -> models.FormSession:
        form = form or self.form()
        return self._save(models.FormSession(id=_id(), form_id=form.id, token=uuid.uuid4().hex))

    def response(self, session, block, payload="answer") -> models.FormSessionResponse:
        return self._save(
            models.FormSessionResponse(
                id=_id(), form_block_id=block.id, form_session_id=session.id, payload=payload
            )
        )


@pytest.fixture(scope="function")
def factory(db) -> Factory:
    return Factory(db)


@pytest.fixture(scope="function")
def auth():
    def headers(user) -> dict:
        return {"Authorization": f"Bearer {user.api_token}"}

    return headers
