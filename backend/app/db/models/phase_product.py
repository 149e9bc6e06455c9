from typing import Any
from sqlalchemy import JSON, BigInteger, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.db.models._mixins import SoftDeleteMixin, TimestampMixin

class PhaseProduct(Base, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "phase_product"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("project.id", ondelete="CASCADE"), index=True)
    phase_id: Mapped[int] = mapped_column(ForeignKey("project_phase.id", ondelete="CASCADE"), index=True)

    name: Mapped[str] = mapped_column(String(255))
    type: Mapped[str] = mapped_column(String(255))
    template_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    direct_project_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    billing_account_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    estimated_price: Mapped[float] = mapped_column(Float, default=0.0)
    actual_price: Mapped[float] = mapped_column(Float, default=0.0)
    details: Mapped[Any] = mapped_column(JSON, nullable=True)

    # marketing attribution, internal only
    utm: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    created_by: Mapped[int] = mapped_column(Integer)
    updated_by: Mapped[int] = mapped_column(Integer)

    phase = relationship("ProjectPhase", back_populates="products")
