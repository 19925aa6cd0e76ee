"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Models are immutable, so a value handed out by a Store can never be used
    to mutate the Store's internal state.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
    )
