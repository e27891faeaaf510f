"""
Base value types shared by every option aggregate

- BoundedFraction: a float in the closed interval [0.0, 1.0]
- TriState: unset / explicitly true / explicitly false
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Tuple, TypeVar, Union

from .errors import ConflictError, OutOfBoundsError

K = TypeVar("K")


@dataclass(frozen=True)
class BoundedFraction:
    """Threshold-like value between 0.0 and 1.0 (both inclusive)"""
    value: float

    def __post_init__(self):
        if isinstance(self.value, bool) or not 0.0 <= self.value <= 1.0:
            raise OutOfBoundsError(self.value)
        object.__setattr__(self, "value", float(self.value))

    @classmethod
    def parse(cls, raw: Union[float, int, str]) -> "BoundedFraction":
        """
        Build from a loosely-typed value ("0.75", 1, 0.5)

        Raises:
            ValueError: raw is not numeric
            OutOfBoundsError: raw is numeric but outside [0, 1]
        """
        if isinstance(raw, str):
            raw = float(raw.strip())
        return cls(raw)

    def to_wire(self) -> float:
        return self.value

    def __float__(self) -> float:
        return self.value


class TriState(Enum):
    """A flag that may be left unset, switched on, or switched off"""
    UNSET = "unset"
    TRUE = "true"
    FALSE = "false"

    @classmethod
    def of(cls, value: Optional[bool]) -> "TriState":
        if value is None:
            return cls.UNSET
        return cls.TRUE if value else cls.FALSE

    @property
    def is_set(self) -> bool:
        return self is not TriState.UNSET

    def to_wire(self) -> Optional[bool]:
        """UNSET -> None, TRUE -> True, FALSE -> False"""
        if self is TriState.TRUE:
            return True
        if self is TriState.FALSE:
            return False
        return None


def collect_flags(
    tokens: Iterable[str],
    parse: Callable[[str], Iterable[Tuple[K, bool]]],
    *,
    invert: bool = False,
) -> Dict[K, bool]:
    """
    Resolve a batch of on/off tokens without touching any state

    Args:
        tokens: raw tokens, e.g. ["en", "!ru"]
        parse: token -> [(key, on)]; raises for unknown tokens
        invert: flip every requested value

    Raises:
        ConflictError: the same key is requested on and off in one batch
    """
    requested: Dict[K, Tuple[bool, str]] = {}
    for token in tokens:
        for key, on in parse(token):
            on = on != invert
            previous = requested.get(key)
            if previous is not None and previous[0] != on:
                if previous[0]:
                    raise ConflictError(previous[1], token)
                raise ConflictError(token, previous[1])
            requested[key] = (on, token)
    return {key: on for key, (on, _) in requested.items()}
