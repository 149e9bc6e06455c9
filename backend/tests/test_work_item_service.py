import pytest
from sqlalchemy import func

from app.db.models import OutboxEvent, PhaseProduct
from app.schemas.phase_products import PhaseProductCreate
from app.services.events.bus import EventBus, EventContext
from app.services.events.constants import RoutingKey
from app.services.work_items import (
    NotFoundError,
    QuotaExceededError,
    announce_work_item,
    create_work_item,
)

from conftest import FakePublisher, add_products, make_hierarchy


def _create(db, ids=(1, 10, 100), max_count=5, **data):
    data.setdefault("name", "Design")
    data.setdefault("type", "product")
    project_id, work_stream_id, phase_id = ids
    return create_work_item(
        db,
        project_id=project_id,
        work_stream_id=work_stream_id,
        phase_id=phase_id,
        data=PhaseProductCreate(**data),
        user_id=7,
        max_count=max_count,
        correlation_id="corr-1",
    )


def test_creates_product_and_pending_event(db):
    make_hierarchy(db)

    created, event_id = _create(db, estimated_price=12.0)

    assert created["estimatedPrice"] == 12.0
    assert created["createdBy"] == created["updatedBy"] == 7
    ev = db.get(OutboxEvent, event_id)
    assert ev.routing_key == RoutingKey.PROJECT_PHASE_PRODUCT_ADDED
    assert ev.correlation_id == "corr-1"
    assert ev.published_at is None
    assert ev.payload == created


def test_quota_failure_rolls_back(db):
    make_hierarchy(db)
    add_products(db, 1, 100, 2)

    with pytest.raises(QuotaExceededError) as e:
        _create(db, max_count=2)

    assert e.value.status_code == 400
    assert db.query(func.count(PhaseProduct.id)).scalar() == 2
    assert db.query(func.count(OutboxEvent.id)).scalar() == 0


def test_unknown_phase(db):
    make_hierarchy(db)

    with pytest.raises(NotFoundError) as e:
        _create(db, ids=(1, 10, 101))

    assert e.value.status_code == 404
    assert "phase id 101" in e.value.message


def test_announce_publishes_and_emits_once(db):
    make_hierarchy(db)
    created, event_id = _create(db)
    publisher = FakePublisher()
    bus = EventBus()
    seen = []
    bus.subscribe(RoutingKey.PROJECT_PHASE_PRODUCT_ADDED, seen.append)

    announce_work_item(db, publisher, bus, created, event_id, EventContext("r", "c", 7))

    assert publisher.calls == [(RoutingKey.PROJECT_PHASE_PRODUCT_ADDED, created, "corr-1")]
    assert seen == [{"req": EventContext("r", "c", 7), "created": created}]
    assert db.get(OutboxEvent, event_id).published_at is not None


def test_announce_survives_dispatch_errors(db, monkeypatch):
    make_hierarchy(db)
    created, event_id = _create(db)
    seen = []
    bus = EventBus()
    bus.subscribe(RoutingKey.PROJECT_PHASE_PRODUCT_ADDED, seen.append)

    def _boom(*args, **kwargs):
        raise RuntimeError("db gone")

    monkeypatch.setattr("app.services.work_items.dispatch_pending", _boom)
    announce_work_item(db, FakePublisher(), bus, created, event_id, EventContext("r", "c", 7))

    assert len(seen) == 1
