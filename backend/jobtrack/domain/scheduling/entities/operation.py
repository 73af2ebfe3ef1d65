"""Operation and quote line item models consumed by the scheduler."""

from pydantic import Field, field_validator

from ...shared.base import ValueObject


def normalize_tags(v):
    """Skill tags compare case-insensitively and ignore surrounding whitespace."""
    if v is None:
        return frozenset()
    if isinstance(v, str):
        v = [v]
    return frozenset(tag.strip().lower() for tag in v if tag and tag.strip())


class Operation(ValueObject):
    """
    One sequenced manufacturing step of a job.

    Operations are immutable for the duration of a scheduling run. The
    estimated duration is expressed in minutes.
    """

    id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=200)
    sequence_order: int = Field(gt=0, description="Position within the job")
    estimated_duration: int = Field(gt=0, description="Estimated minutes")
    preferred_work_center_id: str | None = None
    skill_requirements: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("skill_requirements", mode="before")
    @classmethod
    def normalize_skill_requirements(cls, v):
        return normalize_tags(v)

    @property
    def estimated_hours(self) -> float:
        return self.estimated_duration / 60.0


class LineItem(ValueObject):
    """A quote line item a job was created from."""

    description: str = Field(min_length=1)
    quantity: int = Field(ge=1)
