"""
Base model classes.
"""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """
    Base for all mutable domain entities.

    Assignments are re-validated so an entity can't drift into an invalid
    state after construction.
    """
    model_config = ConfigDict(
        validate_assignment=True,
        str_strip_whitespace=True,
        arbitrary_types_allowed=True,
    )


class ValueObject(BaseModel):
    """Base for immutable value objects."""
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        arbitrary_types_allowed=True,
    )


def require_text(value: str, message: str, min_length: int = 1) -> str:
    """Trim and check a mandatory string field."""
    if value is None:
        raise ValueError(message)
    text = value.strip()
    if not text:
        raise ValueError(message)
    if len(text) < min_length:
        raise ValueError(f"{message} (min {min_length} characters)")
    return text
