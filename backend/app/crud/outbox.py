import datetime as dt
from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.db.models.outbox_event import OutboxEvent

def _now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)

def add_outbox_event(db: Session, routing_key: str, payload: dict, correlation_id: str | None) -> OutboxEvent:
    ev = OutboxEvent(routing_key=routing_key, payload=payload, correlation_id=correlation_id, attempts=0)
    db.add(ev)
    db.flush()
    return ev

def claim_pending_events(
    db: Session,
    max_attempts: int,
    limit: int,
    lease_sec: float,
    event_ids: list[int] | None = None,
) -> list[OutboxEvent]:
    """Take a lease on unpublished events and commit it before returning them.

    Rows locked by another claimer are skipped (SKIP LOCKED on PostgreSQL), and
    rows whose lease has not expired are not returned, so two dispatchers never
    hold the same event.
    """
    now = _now()
    q = db.query(OutboxEvent).filter(
        OutboxEvent.published_at.is_(None),
        OutboxEvent.attempts < max_attempts,
        or_(OutboxEvent.claimed_until.is_(None), OutboxEvent.claimed_until < now),
    )
    if event_ids is not None:
        q = q.filter(OutboxEvent.id.in_(event_ids))
    events = q.order_by(OutboxEvent.id).limit(limit).with_for_update(skip_locked=True).all()
    if not events:
        db.rollback()
        return []
    until = now + dt.timedelta(seconds=lease_sec)
    for ev in events:
        ev.claimed_until = until
    db.commit()
    return events

def mark_published(ev: OutboxEvent) -> None:
    ev.published_at = _now()
    ev.attempts += 1
    ev.last_error = None
    ev.claimed_until = None

def mark_failed(ev: OutboxEvent, error: str) -> None:
    ev.attempts += 1
    ev.last_error = error[:2000]
    ev.claimed_until = None
