from enum import StrEnum
from pathlib import Path
import logging
import sys

from .capabilities import Writable


logger = logging.getLogger(__name__)


class SinkName(StrEnum):

    STDOUT = "stdout"
    STDERR = "stderr"
    NULL = "null"


class Discard():
    """A sink which accepts and drops everything written to it."""

    def write(self, data: bytes) -> int:
        return len(data)

    def __repr__(self):
        return "Discard()"


def open_sink(name: str | Path) -> Writable:
    """Return a binary sink for ``name``.

    The special names "stdout" and "stderr" write to those streams, "null"
    writes to nowhere. Any other name is a file which is created (or
    truncated). If it can't be created, a warning is logged and nothing
    will be written.
    """
    match str(name):
        case SinkName.STDOUT:
            return sys.stdout.buffer
        case SinkName.STDERR:
            return sys.stderr.buffer
        case SinkName.NULL:
            return Discard()
        case _:
            try:
                return Path(name).open("wb", buffering=0)
            except OSError as error:
                logger.warning("Error creating %s: %s", name, error)
                return Discard()
