from typing import (
    Any,
    Protocol,
    TypeVar,
    runtime_checkable,
)
from datetime import datetime


@runtime_checkable
class Readable(Protocol):

    def readinto(self, buffer: bytearray | memoryview) -> int | None:
        ...


@runtime_checkable
class Writable(Protocol):

    def write(self, data: bytes) -> int | None:
        ...


@runtime_checkable
class Closable(Protocol):

    def close(self) -> None:
        ...


@runtime_checkable
class Connection(Protocol):

    def local_address(self) -> Any:
        ...

    def remote_address(self) -> Any:
        ...

    def set_deadline(self, when: datetime | None) -> None:
        ...

    def set_read_deadline(self, when: datetime | None) -> None:
        ...

    def set_write_deadline(self, when: datetime | None) -> None:
        ...


class UnsupportedCapabilityError(TypeError):
    """Raised when an operation is invoked on a target lacking the methods it needs.

    This is a programming error (the target was miswired), so it is never
    reported through the callbacks and it is not an ``OSError``.
    """

    target: Any
    capability: type
    operation: str

    def __init__(self, target: Any, capability: type, operation: str):
        super().__init__(f"{type(target).__name__} does not support {operation} (not {capability.__name__})")
        self.target = target
        self.capability = capability
        self.operation = operation


T = TypeVar("T")


def require(target: Any, capability: type[T], operation: str) -> T:
    if not isinstance(target, capability):
        raise UnsupportedCapabilityError(target, capability, operation)
    return target
