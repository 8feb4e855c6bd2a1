from astikit.bits import BitFlags, bool_to_uint32


def test_bit_flags_add():
    assert BitFlags(2 | 4).add(1) == 7


def test_bit_flags_delete():
    assert BitFlags(2 | 4).delete(2) == 4


def test_bit_flags_has():
    flags = BitFlags(2 | 4)
    assert flags.has(1) is False
    assert flags.has(4) is True


def test_bit_flags_operations_do_not_mutate():
    flags = BitFlags(6)
    flags.add(1)
    flags.delete(2)
    assert int(flags) == 6


def test_bool_to_uint32():
    assert bool_to_uint32(False) == 0
    assert bool_to_uint32(True) == 1