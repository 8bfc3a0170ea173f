# dumpmask/storage/dump_loader.py
# Dump file access -- reads whole dumps into DumpStream values and writes
# masked dumps back out.
#
# DL-01: Files are opened with a context manager; the handle is released on
#        every exit path, including read failures.
# DL-02: A missing path raises InputNotFound; any other read failure raises
#        InputNotReadable. Both name the file.
# DL-03: Dumps are read to completion before any processing starts.

from pathlib import Path
from typing import Union

from dumpmask.compare.data_models.dump_stream import DumpStream
from dumpmask.core.exceptions import InputNotFound, InputNotReadable, OutputNotWritable

STDIN_NAME: str = "<stdin>"

PathLike = Union[str, Path]


def read_dump(path: PathLike) -> DumpStream:
    """
    Read the file at `path` fully and return it as a DumpStream.

    The stream name is the path exactly as the caller gave it.
    """
    name = str(path)
    filepath = Path(path)
    if not filepath.exists():
        raise InputNotFound(name)
    if filepath.is_dir():
        raise InputNotReadable(name, "is a directory")

    try:
        with open(filepath, "rb") as f:
            data = f.read()
    except FileNotFoundError as exc:
        raise InputNotFound(name) from exc
    except OSError as exc:
        raise InputNotReadable(name, exc.strerror or type(exc).__name__) from exc

    return DumpStream(name=name, data=data)


def stream_from_bytes(data: bytes, name: str = STDIN_NAME) -> DumpStream:
    """Wrap caller-supplied bytes (usually standard input) as a DumpStream."""
    return DumpStream(name=name, data=bytes(data))


def write_dump(path: PathLike, data: bytes) -> Path:
    """Write `data` to `path`, replacing any existing file. Returns the Path."""
    filepath = Path(path)
    try:
        with open(filepath, "wb") as f:
            f.write(data)
    except OSError as exc:
        raise OutputNotWritable(str(path), exc.strerror or type(exc).__name__) from exc
    return filepath
