"""
Base value object class.
"""
from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Immutable value compared by its attributes.

    Subclasses override ``validate`` to reject malformed values at
    construction time.
    """

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise a ValidationError if the value is malformed."""
