from dataclasses import dataclass, field
from datetime import datetime
import errno

from pytest import fixture


ERROR_MESSAGE = "ERROR!"


def generate_bytes(length: int) -> bytes:
    return bytes(ord("a") + index % 25 for index in range(length))


def generate_error(transferred: int = 0) -> OSError:
    if transferred > 0:
        return BlockingIOError(errno.EAGAIN, ERROR_MESSAGE, transferred)
    return OSError(ERROR_MESSAGE)


@dataclass
class MockIO():

    write_contents: bytes = b""
    close_call_count: int = 0
    local_address_call_count: int = 0
    remote_address_call_count: int = 0
    set_deadline_call_count: int = 0
    set_read_deadline_call_count: int = 0
    set_write_deadline_call_count: int = 0
    deadlines: list[datetime | None] = field(default_factory=list)

    fail_after_read_byte_count: int = 0
    fail_after_write_byte_count: int = 0
    fail_next_operations: bool = False

    def readinto(self, buffer: bytearray) -> int:
        if self.fail_next_operations:
            raise generate_error()

        n = len(buffer)
        failing = 0 < self.fail_after_read_byte_count <= n
        if failing:
            n = self.fail_after_read_byte_count
        buffer[:n] = generate_bytes(n)
        if failing:
            raise generate_error(n)
        return n

    def write(self, data: bytes) -> int:
        if self.fail_next_operations:
            raise generate_error()

        n = len(data)
        failing = 0 < self.fail_after_write_byte_count <= n
        if failing:
            n = self.fail_after_write_byte_count
        self.write_contents += bytes(data[:n])
        if failing:
            raise generate_error(n)
        return n

    def close(self) -> None:
        self.close_call_count += 1
        if self.fail_next_operations:
            raise generate_error()

    def local_address(self):
        self.local_address_call_count += 1
        return ("127.0.0.1", 1234)

    def remote_address(self):
        self.remote_address_call_count += 1
        return ("127.0.0.1", 4321)

    def set_deadline(self, when: datetime | None) -> None:
        self.set_deadline_call_count += 1
        self.deadlines.append(when)
        if self.fail_next_operations:
            raise generate_error()

    def set_read_deadline(self, when: datetime | None) -> None:
        self.set_read_deadline_call_count += 1
        self.deadlines.append(when)
        if self.fail_next_operations:
            raise generate_error()

    def set_write_deadline(self, when: datetime | None) -> None:
        self.set_write_deadline_call_count += 1
        self.deadlines.append(when)
        if self.fail_next_operations:
            raise generate_error()


@dataclass
class MockReader():

    implementation: MockIO

    def readinto(self, buffer: bytearray) -> int:
        return self.implementation.readinto(buffer)


@dataclass
class MockWriter():

    implementation: MockIO

    def write(self, data: bytes) -> int:
        return self.implementation.write(data)


@dataclass
class MockCloser():

    implementation: MockIO

    def close(self) -> None:
        return self.implementation.close()


class Events(list):
    """Records callback invocations in order."""

    def on_read(self, data: bytes):
        self.append(("read", data))

    def on_write(self, data: bytes):
        self.append(("write", data))

    def on_error(self, location: str, error: BaseException):
        self.append(("error", location, error))

    def on_close(self):
        self.append(("close", ))


@fixture
def mock_io() -> MockIO:
    return MockIO()


@fixture
def failing_mock_io() -> MockIO:
    return MockIO(fail_next_operations=True)


@fixture
def events() -> Events:
    return Events()


@fixture
def single_capability_targets():
    return {
        "reader": MockReader(MockIO()),
        "writer": MockWriter(MockIO()),
        "closer": MockCloser(MockIO()),
    }


@fixture
def make_mock_io():
    return MockIO
