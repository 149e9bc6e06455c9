from sqlalchemy.orm import Session

from app.worker.celery_app import celery_app
from app.core.logging import logger
from app.db.session import SessionLocal
from app.services.events.dispatcher import dispatch_pending
from app.services.events.publisher import make_publisher


@celery_app.task(name="events.dispatch_outbox")
def dispatch_outbox_task() -> int:
    """Re-drive outbox events that were not delivered inline with their request."""
    db: Session = SessionLocal()
    publisher = make_publisher()
    try:
        published = dispatch_pending(db, publisher)
        if published:
            logger.info("outbox_sweep_finished", published=published)
        return published
    except Exception as e:
        logger.exception("outbox_sweep_failed", error=str(e))
        db.rollback()
        raise
    finally:
        publisher.close()
        db.close()
