import sys

from astikit.flags import FlagStrings, flag_cmd


def test_flag_cmd_without_args():
    argv = ["name"]
    assert flag_cmd(argv) == ""
    assert argv == ["name"]


def test_flag_cmd_with_flag():
    argv = ["name", "-flag"]
    assert flag_cmd(argv) == ""
    assert argv == ["name", "-flag"]


def test_flag_cmd_with_command():
    argv = ["name", "cmd", "-x"]
    assert flag_cmd(argv) == "cmd"
    assert argv == ["name", "-x"]


def test_flag_cmd_defaults_to_sys_argv(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["name", "cmd"])
    assert flag_cmd() == "cmd"
    assert sys.argv == ["name"]


def test_flag_strings():
    f = FlagStrings()
    for value in ["1", "2", "1"]:
        f.set(value)
    assert f.values == ["1", "2"]
    assert f.seen == {"1", "2"}
    assert str(f) == "1,2"


def test_flag_strings_empty():
    assert str(FlagStrings()) == ""