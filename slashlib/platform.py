"""Filesystem and seeding helpers relative to a working directory."""

from __future__ import annotations

import enum
import os
import sys
import time


class FileType(enum.Enum):
    NO_EXIST = "no_exist"
    FILE = "file"
    DIR = "dir"


def realpath(cwd: str, path: str) -> str:
    """Resolve *path* against *cwd* (when relative) to a canonical path."""
    if not path.startswith("/"):
        path = f"{cwd}/{path}"
    return os.path.realpath(path)


def file_exists(cwd: str, path: str) -> bool:
    """True if *path* (relative to *cwd*) exists."""
    return os.path.exists(realpath(cwd, path))


def file_type(cwd: str, path: str) -> FileType:
    """Classify *path* (relative to *cwd*) as missing, a directory or a file."""
    try:
        st = os.stat(realpath(cwd, path))
    except OSError:
        return FileType.NO_EXIST
    import stat as _stat

    return FileType.DIR if _stat.S_ISDIR(st.st_mode) else FileType.FILE


def abs_file_exists(path: str) -> bool:
    """True if *path* is absolute and exists."""
    if not path.startswith("/"):
        return False
    try:
        os.stat(path)
    except OSError:
        return False
    return True


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= (1 << 31) else value


def random_seed() -> int:
    """Return a signed 32-bit seed from /dev/urandom, or from the clock."""
    try:
        with open("/dev/urandom", "rb") as f:
            data = f.read(4)
        if len(data) == 4:
            return int.from_bytes(data, sys.byteorder, signed=True)
    except OSError:
        pass
    now = time.time()
    sec = int(now)
    usec = int((now - sec) * 1_000_000)
    return _to_int32(usec ^ sec)