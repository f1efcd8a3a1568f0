"""
Bit-set of Sudoku digits. Bit 0 stands for value 1, bit 8 for value 9.
"""
from typing import Iterable, Iterator, Optional

_ALL_BITS = 0b111111111


class ValueSet:
    """Immutable set of digits drawn from {1..9}"""
    __slots__ = ("bits",)

    ALL: "ValueSet"
    NONE: "ValueSet"

    def __init__(self, values: Iterable[int] = ()):
        bits = 0
        for value in values:
            bits |= _bit(value)
        self.bits = bits

    @classmethod
    def _from_bits(cls, bits: int) -> "ValueSet":
        out = cls.__new__(cls)
        out.bits = bits & _ALL_BITS
        return out

    @classmethod
    def from_value(cls, value: int) -> "ValueSet":
        return cls._from_bits(_bit(value))

    def contains(self, value: int) -> bool:
        return 1 <= value <= 9 and bool(self.bits >> (value - 1) & 1)

    __contains__ = contains

    def __iter__(self) -> Iterator[int]:
        bits = self.bits
        value = 1
        while bits:
            if bits & 1:
                yield value
            bits >>= 1
            value += 1

    def __len__(self) -> int:
        return bin(self.bits).count("1")

    def single(self) -> Optional[int]:
        """The only member, or None unless exactly one value is set"""
        bits = self.bits
        if bits and not bits & (bits - 1):
            return bits.bit_length()
        return None

    # ---------- set algebra ----------

    def __or__(self, other: "ValueSet") -> "ValueSet":
        return ValueSet._from_bits(self.bits | other.bits)

    def __and__(self, other: "ValueSet") -> "ValueSet":
        return ValueSet._from_bits(self.bits & other.bits)

    def __sub__(self, other) -> "ValueSet":
        if isinstance(other, int):
            other = ValueSet.from_value(other)
        return ValueSet._from_bits(self.bits & ~other.bits)

    def __invert__(self) -> "ValueSet":
        # complement relative to {1..9}
        return ValueSet._from_bits(~self.bits)

    union = __or__
    intersection = __and__
    minus = __sub__
    complement = __invert__

    def __eq__(self, other) -> bool:
        return isinstance(other, ValueSet) and self.bits == other.bits

    def __hash__(self) -> int:
        return hash(self.bits)

    def __bool__(self) -> bool:
        return self.bits != 0

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self) + "]"

    def __repr__(self) -> str:
        return f"ValueSet({self})"


def _bit(value: int) -> int:
    if not 1 <= value <= 9:
        raise ValueError(f"Cell value must be in 1..9, got {value}")
    return 1 << (value - 1)


ValueSet.ALL = ValueSet._from_bits(_ALL_BITS)
ValueSet.NONE = ValueSet._from_bits(0)
