import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PhaseProductCreate(_CamelModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    type: str = Field(min_length=1)
    # strict: booleans and numeric strings are rejected, ints are fine for prices
    template_id: StrictInt | None = Field(default=None, gt=0)
    direct_project_id: StrictInt | None = Field(default=None, gt=0)
    billing_account_id: StrictInt | None = Field(default=None, gt=0)
    estimated_price: StrictFloat | None = Field(default=None, gt=0)
    actual_price: StrictFloat | None = Field(default=None, gt=0)
    details: Any = None


class WorkItemCreateIn(BaseModel):
    param: PhaseProductCreate


class PhaseProductOut(_CamelModel):
    """Public shape of a phase product; ``deleted_at`` and ``utm`` stay internal."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: str
    project_id: int
    phase_id: int
    template_id: int | None = None
    direct_project_id: int | None = None
    billing_account_id: int | None = None
    estimated_price: float | None = None
    actual_price: float | None = None
    details: Any = None
    created_by: int
    updated_by: int
    deleted_by: int | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
