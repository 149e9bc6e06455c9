import datetime as dt
from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.db.models._mixins import SoftDeleteMixin, TimestampMixin
from app.db.models.work_stream import phase_work_stream

class ProjectPhase(Base, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "project_phase"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("project.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(256))
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)

    start_date: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    budget: Mapped[float] = mapped_column(Float, default=0.0)
    progress: Mapped[float] = mapped_column(Float, default=0.0)
    details: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    order: Mapped[int | None] = mapped_column(Integer, nullable=True)

    created_by: Mapped[int] = mapped_column(Integer)
    updated_by: Mapped[int] = mapped_column(Integer)

    project = relationship("Project", back_populates="phases")
    work_streams = relationship("WorkStream", secondary=phase_work_stream, back_populates="phases")
    products = relationship("PhaseProduct", back_populates="phase")
