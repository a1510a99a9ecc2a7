from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T_Input = TypeVar("T_Input")
T_Output = TypeVar("T_Output")


class BaseSkill(ABC, Generic[T_Input, T_Output]):
    """Abstract base for typed, single-purpose use cases.

    Subclasses define a concrete input/output contract; skills never span
    more than one logical write (multi-step writes are workflows).
    """

    @abstractmethod
    async def execute(self, input_data: T_Input) -> T_Output:
        """Run the skill logic and return a typed result."""
