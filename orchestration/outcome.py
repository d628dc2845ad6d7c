"""
Tagged results for callers that prefer branching over exception handling.

    outcome = attempt(controller.register_participant, participant, today)
    if not outcome.ok and outcome.kind == ErrorKind.PRECONDITION:
        show(outcome.message)

Only domain errors and model validation errors are converted. Anything else
is a bug and propagates.
"""

from typing import Any, Callable, Optional

import pydantic
from pydantic import BaseModel, ConfigDict

from models import ErrorKind, HackathonError


class Outcome(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    ok: bool
    value: Any = None
    kind: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, value: Any = None) -> "Outcome":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Outcome":
        return cls(ok=False, kind=kind, message=message)

    def unwrap(self) -> Any:
        if not self.ok:
            raise RuntimeError(f"{self.kind.value}: {self.message}")
        return self.value


def attempt(fn: Callable, *args, **kwargs) -> Outcome:
    """Run a command and report how it ended."""
    try:
        return Outcome.success(fn(*args, **kwargs))
    except HackathonError as e:
        return Outcome.failure(e.kind, e.message)
    except pydantic.ValidationError as e:
        return Outcome.failure(ErrorKind.VALIDATION, _first_error(e))


def _first_error(error: pydantic.ValidationError) -> str:
    errors = error.errors()
    if not errors:
        return str(error)
    msg = errors[0].get("msg", str(error))
    # Field validators raise ValueError; pydantic prefixes the message
    return msg.removeprefix("Value error, ")
