"""Zip and unzip directories, optionally under a root path inside the archive."""

from __future__ import annotations

import os
import stat
import threading
import time
import zipfile
from typing import Dict, Optional, Tuple

from .streams import copy_stream

DEFAULT_DIR_MODE = 0o755
_DEFAULT_FILE_MODE = 0o644


def _split_zip_path(path: str) -> Tuple[str, str]:
    """Split "a/b.zip/root/path" into ("a/b.zip", "root/path")."""
    items = path.split(".zip")
    if len(items) > 1:
        external = items[0] + ".zip"
        internal = ".zip".join(items[1:])
        if internal.startswith(os.sep):
            internal = internal[len(os.sep):]
        return external, internal.replace(os.sep, "/")
    return path, ""


def _arcname(internal: str, rel: str) -> str:
    parts = [p for p in (internal.strip("/"), rel.replace(os.sep, "/").strip("/")) if p]
    return "/".join(parts)


def _symlink_info(path: str, name: str) -> zipfile.ZipInfo:
    st = os.lstat(path)
    info = zipfile.ZipInfo(name, time.localtime(st.st_mtime)[:6])
    info.create_system = 3
    info.external_attr = (st.st_mode & 0xFFFF) << 16
    return info


def make_zip(dst: str, src: str, cancel: Optional[threading.Event] = None) -> None:
    """Zip the directory or file ``src`` into ``dst``.

    ``dst`` is either "/path/to/file.zip" or "/path/to/file.zip/root/path",
    the latter placing the content under "root/path" inside the archive.
    """
    external, internal = _split_zip_path(dst)
    parent = os.path.dirname(external)
    if parent:
        os.makedirs(parent, DEFAULT_DIR_MODE, exist_ok=True)
    src = os.path.normpath(src)

    with zipfile.ZipFile(external, "w") as zf:

        def add_file(path: str) -> None:
            name = _arcname(internal, os.path.relpath(path, src) if path != src else "")
            if not name:
                name = os.path.basename(path)
            if os.path.islink(path):
                zf.writestr(_symlink_info(path, name), os.readlink(path))
                return
            info = zipfile.ZipInfo.from_file(path, name)
            info.compress_type = zipfile.ZIP_DEFLATED
            with open(path, "rb") as fh, zf.open(info, "w") as out:
                copy_stream(out, fh, cancel)

        def add_dir(path: str) -> None:
            name = _arcname(internal, os.path.relpath(path, src) if path != src else "")
            if not name:
                return
            zf.writestr(zipfile.ZipInfo.from_file(path, name), b"")

        if not os.path.isdir(src) or os.path.islink(src):
            add_file(src)
            return

        for root, dirnames, filenames in os.walk(src):
            dirnames.sort()
            add_dir(root)
            for dirname in list(dirnames):
                full = os.path.join(root, dirname)
                if os.path.islink(full):
                    dirnames.remove(dirname)
                    add_file(full)
            for filename in sorted(filenames):
                add_file(os.path.join(root, filename))


def extract_zip(dst: str, src: str, cancel: Optional[threading.Event] = None) -> None:
    """Unzip ``src`` into the directory ``dst``.

    ``src`` is either "/path/to/file.zip" or "/path/to/file.zip/root/path",
    the latter extracting only what lies under "root/path". Raises ValueError
    when nothing in the archive matches the root path.
    """
    external, internal = _split_zip_path(src)
    os.makedirs(dst, DEFAULT_DIR_MODE, exist_ok=True)
    base = os.path.abspath(dst)

    with zipfile.ZipFile(external) as zf:
        dirs: Dict[str, zipfile.ZipInfo] = {}
        files: Dict[str, zipfile.ZipInfo] = {}
        symlinks: Dict[str, zipfile.ZipInfo] = {}
        for info in zf.infolist():
            if internal and not info.filename.startswith(internal):
                continue
            rel = info.filename[len(internal):].lstrip("/")
            path = os.path.abspath(os.path.join(base, rel))
            if path != base and not path.startswith(base + os.sep):
                raise ValueError(f"entry {info.filename} points outside {dst}")
            mode = info.external_attr >> 16
            if stat.S_ISLNK(mode):
                symlinks[path] = info
            elif info.is_dir():
                dirs[path] = info
            else:
                files[path] = info

        if internal and not (dirs or files or symlinks):
            raise ValueError(
                f"content in archive does not match specified internal path {internal}"
            )

        for path, info in dirs.items():
            perm = stat.S_IMODE(info.external_attr >> 16) or DEFAULT_DIR_MODE
            os.makedirs(path, perm, exist_ok=True)

        for path, info in files.items():
            os.makedirs(os.path.dirname(path), DEFAULT_DIR_MODE, exist_ok=True)
            perm = stat.S_IMODE(info.external_attr >> 16) or _DEFAULT_FILE_MODE
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
            with zf.open(info) as reader, os.fdopen(fd, "wb") as out:
                copy_stream(out, reader, cancel)

        for path, info in symlinks.items():
            target = zf.read(info).decode("utf-8")
            os.symlink(target, path)