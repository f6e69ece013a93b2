from datetime import datetime
from typing import Any
import errno
import os
import selectors
import socket

import pendulum

from .host_and_port import HostAndPort


# Once readiness is seen, recv/send must not block past the deadline
DONT_WAIT = getattr(socket, "MSG_DONTWAIT", 0)


class SocketConnection():
    """Exposes a connected socket as something a ``StreamProxy`` can wrap.

    Deadlines are absolute (e.g. ``pendulum.now().add(seconds=5)``), naive
    datetimes being taken as local time. Once a deadline has passed, the
    matching operations raise ``TimeoutError`` until a new deadline is set.
    ``None`` clears the deadline.

    The socket timeout is never touched: each operation waits for readiness
    against its own deadline, so one thread may read while another writes.
    """

    _socket: socket.socket

    _read_deadline: pendulum.DateTime | None
    _write_deadline: pendulum.DateTime | None

    def __init__(self, connection_socket: socket.socket):
        self._socket = connection_socket
        self._read_deadline = None
        self._write_deadline = None

    @classmethod
    def connect(cls, host_and_port: HostAndPort, timeout: float | None = None) -> "SocketConnection":
        return cls(socket.create_connection(host_and_port.as_tuple(), timeout=timeout))

    @property
    def connection_socket(self) -> socket.socket:
        return self._socket

    def _deadline_from(self, when: datetime | None) -> pendulum.DateTime | None:
        self._ensure_open()
        if when is None:
            return None
        return pendulum.instance(when, tz=pendulum.local_timezone())

    def _wait_for(self, event: int, deadline: pendulum.DateTime | None) -> int:
        if deadline is None:
            return 0

        remaining = (deadline - pendulum.now()).total_seconds()
        if remaining <= 0:
            raise TimeoutError("timed out")

        with selectors.DefaultSelector() as selector:
            selector.register(self._socket, event)
            if not selector.select(remaining):
                raise TimeoutError("timed out")
        return DONT_WAIT

    def _ensure_open(self):
        if self._socket.fileno() == -1:
            raise OSError(errno.EBADF, os.strerror(errno.EBADF))

    def readinto(self, buffer: bytearray | memoryview) -> int:
        flags = self._wait_for(selectors.EVENT_READ, self._read_deadline)
        return self._socket.recv_into(buffer, 0, flags)

    def write(self, data: bytes) -> int:
        flags = self._wait_for(selectors.EVENT_WRITE, self._write_deadline)
        return self._socket.send(data, flags)

    def close(self) -> None:
        self._socket.close()

    def local_address(self) -> HostAndPort | Any:
        return HostAndPort.from_address(self._socket.getsockname())

    def remote_address(self) -> HostAndPort | Any:
        return HostAndPort.from_address(self._socket.getpeername())

    def set_deadline(self, when: datetime | None) -> None:
        deadline = self._deadline_from(when)
        self._read_deadline = deadline
        self._write_deadline = deadline

    def set_read_deadline(self, when: datetime | None) -> None:
        self._read_deadline = self._deadline_from(when)

    def set_write_deadline(self, when: datetime | None) -> None:
        self._write_deadline = self._deadline_from(when)

    def __enter__(self):
        return self

    def __exit__(self, type, value, traceback):
        self.close()
        return False
