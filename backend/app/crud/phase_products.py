from sqlalchemy import func
from sqlalchemy.orm import Session
from app.db.models.phase_product import PhaseProduct

def count_live_products(db: Session, project_id: int, phase_id: int) -> int:
    return (
        db.query(func.count(PhaseProduct.id))
        .filter(
            PhaseProduct.project_id == project_id,
            PhaseProduct.phase_id == phase_id,
            PhaseProduct.live(),
        )
        .scalar()
        or 0
    )

def add_phase_product(db: Session, values: dict) -> PhaseProduct:
    """Insert without committing; the caller owns the transaction."""
    p = PhaseProduct(**values)
    db.add(p)
    db.flush()
    db.refresh(p)
    return p
