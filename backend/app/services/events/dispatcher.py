from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.logging import logger
from app.crud.outbox import claim_pending_events, mark_failed, mark_published
from app.services.events.publisher import EventPublisher


def dispatch_pending(
    db: Session,
    publisher: EventPublisher,
    event_ids: list[int] | None = None,
    batch_size: int | None = None,
    max_attempts: int | None = None,
) -> int:
    """Publish unpublished outbox events in id order.

    Events are claimed first, so an event already held by another dispatcher
    (the request that created it, or a concurrent sweep) is left alone.
    A failed publish is recorded on the row and does not stop the batch.
    Returns the number of events published.
    """
    max_attempts = max_attempts or settings.OUTBOX_MAX_ATTEMPTS
    events = claim_pending_events(
        db,
        max_attempts=max_attempts,
        limit=batch_size or settings.OUTBOX_BATCH_SIZE,
        lease_sec=settings.OUTBOX_CLAIM_LEASE_SEC,
        event_ids=event_ids,
    )
    if not events:
        return 0

    published = 0
    for ev in events:
        try:
            publisher.publish(ev.routing_key, ev.payload, correlation_id=ev.correlation_id)
        except Exception as e:
            mark_failed(ev, str(e))
            log = logger.error if ev.attempts >= max_attempts else logger.warning
            log(
                "outbox_publish_failed",
                outbox_event_id=ev.id,
                routing_key=ev.routing_key,
                attempts=ev.attempts,
                error=str(e),
            )
            continue
        mark_published(ev)
        published += 1

    db.commit()
    logger.debug("outbox_dispatched", published=published, pending=len(events) - published)
    return published
