from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.db.models._mixins import SoftDeleteMixin, TimestampMixin

class Project(Base, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "project"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(256))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(32), default="draft")

    # upstream billing identifiers, copied onto every phase product
    direct_project_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    billing_account_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    created_by: Mapped[int] = mapped_column(Integer)
    updated_by: Mapped[int] = mapped_column(Integer)

    work_streams = relationship("WorkStream", back_populates="project")
    phases = relationship("ProjectPhase", back_populates="project")
