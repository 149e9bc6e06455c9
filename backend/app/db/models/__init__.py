# import all models for Alembic
from app.db.models.user import User
from app.db.models.project import Project
from app.db.models.work_stream import WorkStream, phase_work_stream
from app.db.models.phase import ProjectPhase
from app.db.models.phase_product import PhaseProduct
from app.db.models.outbox_event import OutboxEvent
