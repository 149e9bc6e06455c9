import datetime as dt

from app.crud.outbox import add_outbox_event
from app.services.events.dispatcher import dispatch_pending

from conftest import FakePublisher


class FlakyPublisher(FakePublisher):
    def __init__(self, failing_keys):
        super().__init__()
        self.failing_keys = set(failing_keys)

    def publish(self, routing_key, payload, correlation_id=None):
        if routing_key in self.failing_keys:
            raise ConnectionError(f"cannot route {routing_key}")
        super().publish(routing_key, payload, correlation_id)


def _events(db, *keys):
    evs = [add_outbox_event(db, k, {"n": i}, f"c{i}") for i, k in enumerate(keys)]
    db.commit()
    return evs


def test_publishes_pending_in_id_order(db):
    _events(db, "a", "b", "c")
    publisher = FakePublisher()

    assert dispatch_pending(db, publisher) == 3

    assert [c[0] for c in publisher.calls] == ["a", "b", "c"]
    assert [c[2] for c in publisher.calls] == ["c0", "c1", "c2"]
    assert dispatch_pending(db, publisher) == 0


def test_failure_is_recorded_and_batch_continues(db):
    a, b = _events(db, "bad", "good")
    publisher = FlakyPublisher({"bad"})

    assert dispatch_pending(db, publisher) == 1

    db.refresh(a)
    db.refresh(b)
    assert a.published_at is None and a.attempts == 1
    assert "cannot route bad" in a.last_error
    assert b.published_at is not None


def test_retried_until_max_attempts(db):
    (ev,) = _events(db, "bad")
    publisher = FlakyPublisher({"bad"})

    for _ in range(5):
        dispatch_pending(db, publisher, max_attempts=3)

    db.refresh(ev)
    assert ev.attempts == 3
    assert ev.published_at is None


def test_recovers_after_transient_failure(db):
    (ev,) = _events(db, "x")
    publisher = FlakyPublisher({"x"})
    dispatch_pending(db, publisher)

    publisher.failing_keys.clear()
    assert dispatch_pending(db, publisher) == 1

    db.refresh(ev)
    assert ev.attempts == 2
    assert ev.last_error is None
    assert ev.published_at is not None


def test_restricted_to_given_ids(db):
    a, b = _events(db, "a", "b")
    publisher = FakePublisher()

    assert dispatch_pending(db, publisher, event_ids=[b.id]) == 1

    assert [c[0] for c in publisher.calls] == ["b"]
    db.refresh(a)
    assert a.published_at is None


def test_batch_size(db):
    _events(db, "a", "b", "c")
    publisher = FakePublisher()

    assert dispatch_pending(db, publisher, batch_size=2) == 2
    assert dispatch_pending(db, publisher, batch_size=2) == 1


class OverlappingDispatchPublisher(FakePublisher):
    """While publishing, lets a second dispatcher try the same events from another session."""

    def __init__(self, other_session, other_publisher, event_ids):
        super().__init__()
        self.other_session = other_session
        self.other_publisher = other_publisher
        self.event_ids = event_ids
        self.other_published = None

    def publish(self, routing_key, payload, correlation_id=None):
        self.other_published = dispatch_pending(self.other_session, self.other_publisher, event_ids=self.event_ids)
        super().publish(routing_key, payload, correlation_id)


def test_event_is_published_once_by_overlapping_dispatchers(session_factory, db):
    (ev,) = _events(db, "a")
    inline = FakePublisher()
    other = session_factory()
    try:
        sweep = OverlappingDispatchPublisher(other, inline, [ev.id])
        assert dispatch_pending(db, sweep) == 1
    finally:
        other.close()

    assert sweep.other_published == 0
    assert inline.calls == []
    assert len(sweep.calls) == 1
    db.refresh(ev)
    assert ev.published_at is not None
    assert ev.claimed_until is None


def test_expired_claim_is_taken_over(db):
    now = dt.datetime.now(dt.timezone.utc)
    held, stale = _events(db, "held", "stale")
    held.claimed_until = now + dt.timedelta(minutes=5)
    stale.claimed_until = now - dt.timedelta(minutes=5)
    db.commit()
    publisher = FakePublisher()

    assert dispatch_pending(db, publisher) == 1

    assert [c[0] for c in publisher.calls] == ["stale"]
    db.refresh(held)
    assert held.published_at is None
