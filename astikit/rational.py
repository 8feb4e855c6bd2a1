"""A rational number with a "num/den" text form."""

from __future__ import annotations

import math
import re
from typing import Union

_INT_RE = re.compile(r"[+-]?[0-9]+")


def _atoi(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"atoi of {text} failed")
    return int(text)


class Rational:
    """A numerator and denominator pair."""

    def __init__(self, num: int = 0, den: int = 1) -> None:
        self._num = num
        self._den = den

    @property
    def num(self) -> int:
        return self._num

    @property
    def den(self) -> int:
        return self._den

    def to_float(self) -> float:
        """Return num / den; division by zero yields an infinity or NaN."""
        if self._den == 0:
            if self._num == 0:
                return math.nan
            return math.copysign(math.inf, self._num)
        return self._num / self._den

    def marshal_text(self) -> str:
        return f"{self._num}/{self._den}"

    def unmarshal_text(self, data: Union[str, bytes]) -> None:
        """Parse "num" or "num/den"; empty input gives 0/1."""
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("utf-8")
        self._num = 0
        self._den = 1
        if not data:
            return
        items = data.split("/")
        self._num = _atoi(items[0])
        if len(items) > 1:
            self._den = _atoi(items[1])

    def __str__(self) -> str:
        return self.marshal_text()

    def __repr__(self) -> str:
        return f"Rational({self._num}, {self._den})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rational):
            return NotImplemented
        return (self._num, self._den) == (other._num, other._den)

    def __hash__(self) -> int:
        return hash((self._num, self._den))