from sqlalchemy.orm import Session
from app.db.session import SessionLocal
from app.core.config import settings
from app.core.logging import logger
from app.crud.users import get_user_by_login, create_user
from app.schemas.auth import UserCreateIn
from app.db.models.user import Role
from app.db.models.project import Project
from app.db.models.work_stream import WorkStream
from app.db.models.phase import ProjectPhase
from app.crud.projects import list_projects

def seed_demo():
    db: Session = SessionLocal()
    try:
        if not (settings.DEMO_ADMIN_LOGIN and settings.DEMO_ADMIN_PASSWORD):
            return
        u = get_user_by_login(db, settings.DEMO_ADMIN_LOGIN)
        if not u:
            u = create_user(db, UserCreateIn(
                login=settings.DEMO_ADMIN_LOGIN,
                password=settings.DEMO_ADMIN_PASSWORD,
                role=Role.admin.value,
                full_name="Demo Admin",
            ))
        # Create default project hierarchy if none
        if not list_projects(db):
            project = Project(
                name="Demo Project",
                description="Seeded demo project",
                direct_project_id=1001,
                billing_account_id=2001,
                created_by=u.id,
                updated_by=u.id,
            )
            stream = WorkStream(name="Design", type="generic", project=project, created_by=u.id, updated_by=u.id)
            phase = ProjectPhase(name="Discovery", project=project, created_by=u.id, updated_by=u.id)
            phase.work_streams.append(stream)
            db.add_all([project, stream, phase])
            db.commit()
            logger.info("demo_seeded", project_id=project.id, work_stream_id=stream.id, phase_id=phase.id)
    finally:
        db.close()
