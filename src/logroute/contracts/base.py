"""Shared pydantic base for pipeline resource models."""

from pydantic import BaseModel, ConfigDict


class ResourceModel(BaseModel):
    """Base class for all declarative resource models.

    Models are immutable once validated and reject unknown fields, which is
    also what lets the tagged unions (conditions, filters, rewrite rules)
    pick their variant from the payload key alone.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)
