import os
import threading
import zipfile
from concurrent.futures import CancelledError

import pytest

from astikit.archive import extract_zip, make_zip


def _dir_content(path):
    out = {}
    for root, _dirs, files in os.walk(path):
        for name in files:
            full = os.path.join(root, name)
            with open(full, "rb") as fh:
                out[os.path.relpath(full, path)] = fh.read()
    return out


@pytest.fixture
def source(tmp_path):
    src = tmp_path / "src"
    (src / "d" / "e").mkdir(parents=True)
    (src / "f").write_bytes(b"0")
    (src / "d" / "f").write_bytes(b"1")
    (src / "d" / "e" / "f").write_bytes(b"2")
    return str(src)


def test_zip_with_internal_path(tmp_path, source):
    archive = os.path.join(str(tmp_path), "with-internal", "f.zip")
    make_zip(archive + "/root", source)
    with zipfile.ZipFile(archive) as zf:
        names = set(zf.namelist())
    assert "root/f" in names
    assert "root/d/e/f" in names

    dst = os.path.join(str(tmp_path), "with-internal", "d")
    with pytest.raises(ValueError):
        extract_zip(dst, archive + "/invalid")
    extract_zip(dst, archive + "/root")
    assert _dir_content(dst) == _dir_content(source)


def test_zip_without_internal_path(tmp_path, source):
    archive = os.path.join(str(tmp_path), "without-internal", "f.zip")
    make_zip(archive, source)
    dst = os.path.join(str(tmp_path), "without-internal", "d")
    extract_zip(dst, archive)
    assert _dir_content(dst) == _dir_content(source)
    assert _dir_content(dst)[os.path.join("d", "e", "f")] == b"2"


def test_zip_entries_are_deflated(tmp_path, source):
    archive = os.path.join(str(tmp_path), "f.zip")
    make_zip(archive, source)
    with zipfile.ZipFile(archive) as zf:
        info = zf.getinfo("d/f")
    assert info.compress_type == zipfile.ZIP_DEFLATED


def test_zip_symlink_round_trip(tmp_path, source):
    os.symlink("f", os.path.join(source, "link"))
    archive = os.path.join(str(tmp_path), "f.zip")
    make_zip(archive, source)
    dst = os.path.join(str(tmp_path), "out")
    extract_zip(dst, archive)
    assert os.readlink(os.path.join(dst, "link")) == "f"


def test_zip_cancelled(tmp_path, source):
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(CancelledError):
        make_zip(os.path.join(str(tmp_path), "f.zip"), source, cancel)


def test_extract_missing_archive(tmp_path):
    with pytest.raises(FileNotFoundError):
        extract_zip(str(tmp_path / "out"), str(tmp_path / "missing.zip"))