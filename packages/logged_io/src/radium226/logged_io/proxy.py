from typing import (
    Any,
    Callable,
    Generic,
    TypeAlias,
    TypeVar,
)
from datetime import datetime
from enum import StrEnum

from .capabilities import (
    Readable,
    Writable,
    Closable,
    Connection,
    require,
)


ByteCallback: TypeAlias = Callable[[bytes], None]
ErrorCallback: TypeAlias = Callable[[str, BaseException], None]
CloseCallback: TypeAlias = Callable[[], None]


class Location(StrEnum):

    READ = "Read()"
    WRITE = "Write()"
    CLOSE = "Close()"
    SET_DEADLINE = "SetDeadline()"
    SET_READ_DEADLINE = "SetReadDeadline()"
    SET_WRITE_DEADLINE = "SetWriteDeadline()"


def _ignore_bytes(data: bytes) -> None:
    pass


def _ignore_error(location: str, error: BaseException) -> None:
    pass


def _ignore_close() -> None:
    pass


def transferred_count(error: BaseException) -> int:
    """Number of bytes moved before ``error`` was raised.

    Follows ``io.BlockingIOError``, which carries it in ``characters_written``.
    """
    return getattr(error, "characters_written", 0) or 0


T = TypeVar("T")


class StreamProxy(Generic[T]):
    """Proxies ``readinto``, ``write``, ``close`` and the ``Connection`` methods
    of a target, reporting read, write, error and close events.

    The target is duck typed: nothing is checked until an operation is
    invoked, at which point an ``UnsupportedCapabilityError`` is raised if the
    target lacks it.

    Callbacks are called AFTER the event occurs. If a read or write fails,
    only the bytes actually transferred are reported (if any), after which
    the error is reported. Results and exceptions are passed through as is.
    """

    _target: T
    _on_read: ByteCallback
    _on_write: ByteCallback
    _on_error: ErrorCallback
    _on_close: CloseCallback

    def __init__(self,
        target: T,
        on_read: ByteCallback | None = None,
        on_write: ByteCallback | None = None,
        on_error: ErrorCallback | None = None,
        on_close: CloseCallback | None = None,
    ):
        self._target = target
        self._on_read = on_read or _ignore_bytes
        self._on_write = on_write or _ignore_bytes
        self._on_error = on_error or _ignore_error
        self._on_close = on_close or _ignore_close

    @property
    def target(self) -> T:
        return self._target

    @property
    def on_read(self) -> ByteCallback:
        return self._on_read

    @property
    def on_write(self) -> ByteCallback:
        return self._on_write

    @property
    def on_error(self) -> ErrorCallback:
        return self._on_error

    @property
    def on_close(self) -> CloseCallback:
        return self._on_close

    def readinto(self, buffer: bytearray | memoryview) -> int | None:
        reader = require(self._target, Readable, "readinto()")
        try:
            n = reader.readinto(buffer)
        except Exception as error:
            if n := transferred_count(error):
                self._on_read(bytes(buffer[:n]))
            self._on_error(Location.READ, error)
            raise

        if n:
            self._on_read(bytes(buffer[:n]))
        return n

    def write(self, data: bytes) -> int | None:
        writer = require(self._target, Writable, "write()")
        try:
            n = writer.write(data)
        except Exception as error:
            if n := transferred_count(error):
                self._on_write(bytes(data[:n]))
            self._on_error(Location.WRITE, error)
            raise

        if n:
            self._on_write(bytes(data[:n]))
        return n

    def close(self) -> None:
        closer = require(self._target, Closable, "close()")
        try:
            closer.close()
        except Exception as error:
            self._on_close()
            self._on_error(Location.CLOSE, error)
            raise

        self._on_close()

    def local_address(self) -> Any:
        connection = require(self._target, Connection, "local_address()")
        return connection.local_address()

    def remote_address(self) -> Any:
        connection = require(self._target, Connection, "remote_address()")
        return connection.remote_address()

    def set_deadline(self, when: datetime | None) -> None:
        connection = require(self._target, Connection, "set_deadline()")
        try:
            connection.set_deadline(when)
        except Exception as error:
            self._on_error(Location.SET_DEADLINE, error)
            raise

    def set_read_deadline(self, when: datetime | None) -> None:
        connection = require(self._target, Connection, "set_read_deadline()")
        try:
            connection.set_read_deadline(when)
        except Exception as error:
            self._on_error(Location.SET_READ_DEADLINE, error)
            raise

    def set_write_deadline(self, when: datetime | None) -> None:
        connection = require(self._target, Connection, "set_write_deadline()")
        try:
            connection.set_write_deadline(when)
        except Exception as error:
            self._on_error(Location.SET_WRITE_DEADLINE, error)
            raise

    def __enter__(self):
        return self

    def __exit__(self, type, value, traceback):
        self.close()
        return False

    def __repr__(self):
        return f"StreamProxy(target={self._target!r})"
