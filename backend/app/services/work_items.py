"""Creation of work items (phase products) under a project phase.

The read checks, quota count, insert and outbox write share one transaction:
any failure rolls all of it back. Events are delivered only after commit.
"""
from typing import Any

from sqlalchemy.orm import Session

from app.core.logging import logger
from app.crud.outbox import add_outbox_event
from app.crud.phase_products import add_phase_product, count_live_products
from app.crud.projects import get_active_project, get_linked_phase
from app.db.models.phase_product import PhaseProduct
from app.schemas.phase_products import PhaseProductCreate, PhaseProductOut
from app.services.events.bus import EventBus, EventContext
from app.services.events.constants import RoutingKey
from app.services.events.dispatcher import dispatch_pending
from app.services.events.publisher import EventPublisher


class WorkItemError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(WorkItemError):
    status_code = 404


class QuotaExceededError(WorkItemError):
    status_code = 400


def sanitize(product: PhaseProduct) -> dict[str, Any]:
    return PhaseProductOut.model_validate(product).model_dump(mode="json", by_alias=True)


def create_work_item(
    db: Session,
    project_id: int,
    work_stream_id: int,
    phase_id: int,
    data: PhaseProductCreate,
    user_id: int,
    max_count: int,
    correlation_id: str | None = None,
) -> tuple[dict[str, Any], int]:
    """Returns the sanitized product and the id of its pending outbox event."""
    try:
        phase = get_linked_phase(db, project_id, work_stream_id, phase_id, lock=True)
        if phase is None:
            raise NotFoundError(
                f"project work stream not found for project id {project_id}"
                f" and work stream {work_stream_id} and phase id {phase_id}"
            )

        project = get_active_project(db, project_id)
        if project is None:
            raise NotFoundError(f"project not found for project id {project_id}")

        values = data.model_dump(exclude_none=True)
        # project-level billing identifiers win over anything the caller sent
        values.update(
            project_id=project_id,
            phase_id=phase_id,
            direct_project_id=project.direct_project_id,
            billing_account_id=project.billing_account_id,
            created_by=user_id,
            updated_by=user_id,
        )

        count = count_live_products(db, project_id, phase_id)
        if count >= max_count:
            raise QuotaExceededError(f"the number of products per phase cannot exceed {max_count}")

        product = add_phase_product(db, values)
        logger.debug("phase_product_created", phase_product_id=product.id, name=product.name)

        created = sanitize(product)
        event_id = add_outbox_event(db, RoutingKey.PROJECT_PHASE_PRODUCT_ADDED, created, correlation_id).id
        db.commit()
    except Exception:
        db.rollback()
        raise

    return created, event_id


def announce_work_item(
    db: Session,
    publisher: EventPublisher,
    bus: EventBus,
    created: dict[str, Any],
    outbox_event_id: int,
    context: EventContext,
) -> None:
    """Deliver the creation event to the durable bus and to in-process listeners.

    The row is already committed here, so delivery problems are logged and
    left to the outbox sweep instead of failing the request.
    """
    logger.debug("sending_event_to_bus", phase_product_id=created["id"], outbox_event_id=outbox_event_id)
    try:
        dispatch_pending(db, publisher, event_ids=[outbox_event_id])
    except Exception as e:
        db.rollback()
        logger.exception("outbox_dispatch_failed", outbox_event_id=outbox_event_id, error=str(e))

    logger.debug("sending_event_to_listeners", phase_product_id=created["id"])
    bus.emit(RoutingKey.PROJECT_PHASE_PRODUCT_ADDED, {"req": context, "created": created})
