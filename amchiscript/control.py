"""Statement outcomes.

Executing a statement yields an :class:`Outcome` instead of raising for
``thamb``, ``pudheJa`` and ``paratDe``. Loops consume ``BREAK`` and
``CONTINUE``; function calls consume ``RETURN``; everything else passes a
non-normal outcome straight up to its caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Signal(Enum):
    NORMAL = "normal"
    BREAK = "break"
    CONTINUE = "continue"
    RETURN = "return"


@dataclass(frozen=True)
class Outcome:
    """Result of executing one statement."""

    signal: Signal
    value: Any = None

    @property
    def is_normal(self) -> bool:
        return self.signal is Signal.NORMAL

    @classmethod
    def returned(cls, value: Any) -> Outcome:
        return cls(Signal.RETURN, value)


NORMAL = Outcome(Signal.NORMAL)
BREAK = Outcome(Signal.BREAK)
CONTINUE = Outcome(Signal.CONTINUE)
