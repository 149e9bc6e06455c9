from sqlalchemy.orm import Session
from app.db.models.project import Project
from app.db.models.phase import ProjectPhase
from app.db.models.work_stream import WorkStream

def list_projects(db: Session):
    return db.query(Project).filter(Project.live()).order_by(Project.id).all()

def get_active_project(db: Session, project_id: int) -> Project | None:
    return db.query(Project).filter(Project.id == project_id, Project.live()).one_or_none()

def get_linked_phase(
    db: Session,
    project_id: int,
    work_stream_id: int,
    phase_id: int,
    lock: bool = False,
) -> ProjectPhase | None:
    """Phase of the project that is attached to the given work stream of the same project."""
    q = (
        db.query(ProjectPhase)
        .join(ProjectPhase.work_streams)
        .filter(
            ProjectPhase.id == phase_id,
            ProjectPhase.project_id == project_id,
            ProjectPhase.live(),
            WorkStream.id == work_stream_id,
            WorkStream.project_id == project_id,
            WorkStream.live(),
        )
    )
    if lock:
        # serializes concurrent product creation for this phase (no-op on sqlite)
        q = q.with_for_update(of=ProjectPhase)
    return q.first()
