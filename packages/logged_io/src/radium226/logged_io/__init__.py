from .capabilities import Readable, Writable, Closable, Connection, UnsupportedCapabilityError
from .proxy import StreamProxy, Location
from .reporting import generic, string_to_log, hex_to_log, string_to_writer, hex_to_writer, dump_to_writers, dump_to_files, to_hex
from .sinks import open_sink, Discard, SinkName
from .socket_connection import SocketConnection
from .host_and_port import HostAndPort


__all__ = [
    "Readable",
    "Writable",
    "Closable",
    "Connection",
    "UnsupportedCapabilityError",
    "StreamProxy",
    "Location",
    "generic",
    "string_to_log",
    "hex_to_log",
    "string_to_writer",
    "hex_to_writer",
    "dump_to_writers",
    "dump_to_files",
    "to_hex",
    "open_sink",
    "Discard",
    "SinkName",
    "SocketConnection",
    "HostAndPort",
]
