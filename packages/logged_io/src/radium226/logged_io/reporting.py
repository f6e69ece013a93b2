"""Constructors wiring a ``StreamProxy`` to a log, a sink or files.

``read_format`` and ``write_format`` must contain a single ``%s`` for the
payload. ``error_format`` must contain a ``%s`` for the location where the
error occurred and a second ``%s`` for the error itself, in that order.
``close_message`` is reported as is.

If any template is empty, that particular reporting is disabled.
"""

from contextlib import ExitStack
from io import FileIO
from pathlib import Path
import logging
import weakref
from typing import TypeVar

from .capabilities import Writable
from .proxy import (
    StreamProxy,
    ByteCallback,
    ErrorCallback,
    CloseCallback,
)
from .sinks import open_sink


T = TypeVar("T")
C = TypeVar("C")

ENCODING = "utf-8"

DEFAULT_LOGGER = logging.getLogger("radium226.logged_io")


def to_hex(data: bytes) -> str:
    return data.hex(" ")


def to_text(data: bytes) -> str:
    return data.decode(ENCODING, errors="replace")


def _unless_empty(template: str, callback: C) -> C | None:
    return callback if template else None


def _write_all(sink: Writable, data: bytes) -> None:
    while data:
        n = sink.write(data)
        # None means the sink took everything (e.g. a text-style writer)
        if n is None:
            break
        data = data[n:]


def _write_text(sink: Writable, text: str) -> None:
    _write_all(sink, text.encode(ENCODING))


def generic(
    target: T,
    on_read: ByteCallback | None,
    on_write: ByteCallback | None,
    on_error: ErrorCallback | None,
    on_close: CloseCallback | None,
) -> StreamProxy[T]:
    """Create a proxy where all reporting is user defined."""
    return StreamProxy(target, on_read, on_write, on_error, on_close)


def _to_log(
    target: T,
    render,
    read_format: str,
    write_format: str,
    error_format: str,
    close_message: str,
    logger: logging.Logger | None,
    level: int,
) -> StreamProxy[T]:
    logger = logger or DEFAULT_LOGGER
    return generic(
        target,
        _unless_empty(read_format, lambda data: logger.log(level, read_format, render(data))),
        _unless_empty(write_format, lambda data: logger.log(level, write_format, render(data))),
        _unless_empty(error_format, lambda location, error: logger.log(level, error_format, location, error)),
        _unless_empty(close_message, lambda: logger.log(level, "%s", close_message)),
    )


def string_to_log(
    target: T,
    read_format: str,
    write_format: str,
    error_format: str,
    close_message: str,
    *,
    logger: logging.Logger | None = None,
    level: int = logging.INFO,
) -> StreamProxy[T]:
    """Create a proxy logging the contents of the data as strings."""
    return _to_log(target, to_text, read_format, write_format, error_format, close_message, logger, level)


def hex_to_log(
    target: T,
    read_format: str,
    write_format: str,
    error_format: str,
    close_message: str,
    *,
    logger: logging.Logger | None = None,
    level: int = logging.INFO,
) -> StreamProxy[T]:
    """Create a proxy logging the hex encoded contents of the data."""
    return _to_log(target, to_hex, read_format, write_format, error_format, close_message, logger, level)


def _to_writer(
    target: T,
    sink: Writable,
    render,
    read_format: str,
    write_format: str,
    error_format: str,
    close_message: str,
) -> StreamProxy[T]:
    return generic(
        target,
        _unless_empty(read_format, lambda data: _write_text(sink, read_format % render(data))),
        _unless_empty(write_format, lambda data: _write_text(sink, write_format % render(data))),
        _unless_empty(error_format, lambda location, error: _write_text(sink, error_format % (location, error))),
        _unless_empty(close_message, lambda: _write_text(sink, close_message)),
    )


def string_to_writer(
    target: T,
    sink: Writable,
    read_format: str,
    write_format: str,
    error_format: str,
    close_message: str,
) -> StreamProxy[T]:
    """Create a proxy writing the contents of the data as strings to ``sink``."""
    return _to_writer(target, sink, to_text, read_format, write_format, error_format, close_message)


def hex_to_writer(
    target: T,
    sink: Writable,
    read_format: str,
    write_format: str,
    error_format: str,
    close_message: str,
) -> StreamProxy[T]:
    """Create a proxy writing the hex encoded contents of the data to ``sink``."""
    return _to_writer(target, sink, to_hex, read_format, write_format, error_format, close_message)


def dump_to_writers(
    target: T,
    read_sink: Writable,
    write_sink: Writable,
    notify_sink: Writable,
    error_format: str,
    close_message: str,
) -> StreamProxy[T]:
    """Create a proxy dumping the raw data to sinks, one for all reads and one
    for all writes. Errors and closes go to ``notify_sink``.

    Failing to write to ``read_sink`` or ``write_sink`` is reported as an error
    located at "read sink" or "write sink".
    """
    def report_error(location: str, error: BaseException) -> None:
        if error_format:
            _write_text(notify_sink, error_format % (location, error))

    def dump(sink: Writable, location: str) -> ByteCallback:
        def callback(data: bytes) -> None:
            try:
                _write_all(sink, data)
            except OSError as error:
                report_error(location, error)
        return callback

    return generic(
        target,
        dump(read_sink, "read sink"),
        dump(write_sink, "write sink"),
        _unless_empty(error_format, report_error),
        _unless_empty(close_message, lambda: _write_text(notify_sink, close_message)),
    )


def dump_to_files(
    target: T,
    read_filename: str | Path,
    write_filename: str | Path,
    notify_filename: str | Path,
    error_format: str,
    close_message: str,
) -> StreamProxy[T]:
    """Create a proxy dumping the raw data to files (one for all reads, one for
    all writes, one for other events). See ``open_sink`` for the special names.

    The files are closed once the returned proxy is garbage collected.
    """
    exit_stack = ExitStack()
    sinks = [open_sink(filename) for filename in (read_filename, write_filename, notify_filename)]
    for sink in sinks:
        if isinstance(sink, FileIO):
            exit_stack.enter_context(sink)

    proxy = dump_to_writers(target, *sinks, error_format, close_message)
    weakref.finalize(proxy, exit_stack.close)
    return proxy
