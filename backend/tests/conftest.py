import datetime as dt
import os

os.environ["ENV"] = "test"
os.environ["SEED_DEMO"] = "false"
os.environ["DATABASE_URL"] = "sqlite+pysqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.deps import get_db
from app.core.security import create_access_token
from app.db.base import Base
from app.db.models import PhaseProduct, Project, ProjectPhase, User, WorkStream
from app.db.models.user import Role
from app.main import create_app
from app.services.events.bus import EventBus
from app.services.events.constants import RoutingKey


DELETED_AT = dt.datetime(2026, 1, 1, tzinfo=dt.timezone.utc)


class FakePublisher:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    def publish(self, routing_key, payload, correlation_id=None):
        if self.fail:
            raise ConnectionError("broker unavailable")
        self.calls.append((routing_key, payload, correlation_id))


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(f"sqlite+pysqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def publisher():
    return FakePublisher()


@pytest.fixture
def emitted():
    return []


def build_client(session_factory, publisher, emitted, **client_kw) -> TestClient:
    bus = EventBus()
    bus.subscribe(RoutingKey.PROJECT_PHASE_PRODUCT_ADDED, emitted.append)
    app = create_app(publisher=publisher, event_bus=bus)

    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    return TestClient(app, **client_kw)


@pytest.fixture
def client(session_factory, publisher, emitted):
    return build_client(session_factory, publisher, emitted)


def make_user(db, login="copilot", role=Role.copilot, is_active=True) -> User:
    u = User(login=login, password_hash="-", role=role.value, is_active=is_active)
    db.add(u)
    db.commit()
    return u


def auth_header(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(sub=user.login, user_id=user.id, role=user.role)}"}


def make_hierarchy(db, project_id=1, work_stream_id=10, phase_id=100, **project_kw):
    """Project with one work stream and one phase linked to it."""
    project_kw.setdefault("direct_project_id", 5001)
    project_kw.setdefault("billing_account_id", 7001)
    project = Project(id=project_id, name=f"Project {project_id}", created_by=1, updated_by=1, **project_kw)
    stream = WorkStream(id=work_stream_id, project=project, name="Stream", type="generic", created_by=1, updated_by=1)
    phase = ProjectPhase(id=phase_id, project=project, name="Phase", created_by=1, updated_by=1)
    phase.work_streams.append(stream)
    db.add_all([project, stream, phase])
    db.commit()
    return project, stream, phase


def add_products(db, project_id, phase_id, n, deleted=False):
    for i in range(n):
        db.add(PhaseProduct(
            project_id=project_id,
            phase_id=phase_id,
            name=f"existing-{i}",
            type="product",
            created_by=1,
            updated_by=1,
            deleted_at=DELETED_AT if deleted else None,
        ))
    db.commit()
