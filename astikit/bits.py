"""Bit flag helpers."""

_UINT64_MASK = (1 << 64) - 1


class BitFlags(int):
    """An unsigned 64-bit set of flags."""

    def add(self, flag: int) -> int:
        """Return the flags with ``flag`` set."""
        return (int(self) | flag) & _UINT64_MASK

    def delete(self, flag: int) -> int:
        """Return the flags with ``flag`` cleared."""
        return int(self) & ~flag & _UINT64_MASK

    def has(self, flag: int) -> bool:
        """Return True if any bit of ``flag`` is set."""
        return (int(self) & flag) > 0


def bool_to_uint32(value: bool) -> int:
    """Return 1 for a true value and 0 otherwise."""
    return int(bool(value))