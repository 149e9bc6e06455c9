from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.db.models._mixins import SoftDeleteMixin, TimestampMixin

phase_work_stream = Table(
    "phase_work_stream",
    Base.metadata,
    Column("work_stream_id", ForeignKey("work_stream.id", ondelete="CASCADE"), primary_key=True),
    Column("phase_id", ForeignKey("project_phase.id", ondelete="CASCADE"), primary_key=True),
)

class WorkStream(Base, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "work_stream"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("project.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(256))
    type: Mapped[str] = mapped_column(String(64))
    status: Mapped[str] = mapped_column(String(32), default="draft")

    created_by: Mapped[int] = mapped_column(Integer)
    updated_by: Mapped[int] = mapped_column(Integer)

    project = relationship("Project", back_populates="work_streams")
    phases = relationship("ProjectPhase", secondary=phase_work_stream, back_populates="work_streams")
