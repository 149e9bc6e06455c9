from celery import Celery
from app.core.config import settings

celery_app = Celery(
    "workitems",
    broker=settings.REDIS_URL,
    backend=settings.REDIS_URL,
    include=["app.worker.tasks"],
)
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    task_acks_late=True,
    beat_schedule={
        "dispatch-outbox": {
            "task": "events.dispatch_outbox",
            "schedule": settings.OUTBOX_DISPATCH_INTERVAL_SEC,
        },
    },
)
