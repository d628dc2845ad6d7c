"""
People - participants (judges included) and the organizer.
"""

from pydantic import Field, field_validator

from .base import ValueObject, require_text


class Participant(ValueObject):
    """
    A registered person. Judges are participants sitting on the event's
    judge panel - there is no separate judge type.

    Identity is the id: two participants with the same id are the same
    person even if the other fields differ.
    """
    id: int = Field(gt=0)
    first_name: str
    last_name: str
    email: str

    @field_validator("first_name", "last_name")
    @classmethod
    def _check_name(cls, v: str, info) -> str:
        label = info.field_name.replace("_", " ").capitalize()
        return require_text(v, f"{label} not valid", min_length=3)

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return require_text(v, "Email not valid")

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Participant):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"{self.display_name} ({self.email})"


class Organizer(ValueObject):
    """
    The person running the event.

    The password is kept in plain text and compared verbatim.
    """
    id: int = Field(gt=0)
    first_name: str
    last_name: str
    password: str = Field(repr=False)

    @field_validator("first_name", "last_name", "password")
    @classmethod
    def _check_min3(cls, v: str, info) -> str:
        label = info.field_name.replace("_", " ").capitalize()
        return require_text(v, f"Organizer {label.lower()} not valid", min_length=3)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def check_password(self, attempt: str) -> bool:
        if attempt is None:
            return False
        return self.password == attempt

    def __eq__(self, other) -> bool:
        if not isinstance(other, Organizer):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.display_name
