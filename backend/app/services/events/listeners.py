from typing import Any

from app.core.logging import logger
from app.services.events.bus import EventBus
from app.services.events.constants import RoutingKey


def log_phase_product_added(payload: dict[str, Any]) -> None:
    ctx = payload["req"]
    created = payload["created"]
    logger.info(
        "phase_product_added",
        phase_product_id=created["id"],
        project_id=created["projectId"],
        phase_id=created["phaseId"],
        user_id=ctx.user_id,
        correlation_id=ctx.correlation_id,
    )


def register_default_listeners(bus: EventBus) -> None:
    bus.subscribe(RoutingKey.PROJECT_PHASE_PRODUCT_ADDED, log_phase_product_added)
