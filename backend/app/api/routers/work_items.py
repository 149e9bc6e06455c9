from fastapi import APIRouter, Depends, Path, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.deps import get_db, get_event_bus, get_publisher, require_permission
from app.db.models.user import User
from app.schemas.envelope import wrap_response
from app.schemas.phase_products import WorkItemCreateIn
from app.services.events.bus import EventBus, EventContext
from app.services.events.publisher import EventPublisher
from app.services.work_items import announce_work_item, create_work_item

router = APIRouter()


@router.post(
    "/{project_id}/workstreams/{work_stream_id}/works/{work_id}/products",
    status_code=status.HTTP_201_CREATED,
)
def create_work_item_endpoint(
    request: Request,
    data: WorkItemCreateIn,
    project_id: int = Path(..., gt=0),
    work_stream_id: int = Path(..., gt=0),
    work_id: int = Path(..., gt=0, description="Phase ID"),
    db: Session = Depends(get_db),
    user: User = Depends(require_permission("workItem.create")),
    publisher: EventPublisher = Depends(get_publisher),
    bus: EventBus = Depends(get_event_bus),
):
    request_id = request.state.request_id
    correlation_id = request.state.correlation_id

    created, outbox_event_id = create_work_item(
        db,
        project_id=project_id,
        work_stream_id=work_stream_id,
        phase_id=work_id,
        data=data.param,
        user_id=user.id,
        max_count=settings.MAX_PHASE_PRODUCT_COUNT,
        correlation_id=correlation_id,
    )
    announce_work_item(
        db,
        publisher,
        bus,
        created,
        outbox_event_id,
        EventContext(request_id=request_id, correlation_id=correlation_id, user_id=user.id),
    )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=wrap_response(request_id, created, total_count=1, status=status.HTTP_201_CREATED),
    )
