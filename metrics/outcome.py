"""Discriminated results returned to the host runtime"""
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Outcome(str, Enum):
    """Output port the host should follow"""
    NEXT = "next"
    ERROR = "error"


@dataclass
class FlowResult:
    """Value paired with its outcome; unpacks as ``value, output``"""
    value: Any
    output: Outcome

    @classmethod
    def next(cls, value: Any) -> "FlowResult":
        return cls(value, Outcome.NEXT)

    @classmethod
    def error(cls, error: Exception) -> "FlowResult":
        return cls(error, Outcome.ERROR)

    @property
    def ok(self) -> bool:
        return self.output == Outcome.NEXT

    def __iter__(self):
        yield self.value
        yield self.output
