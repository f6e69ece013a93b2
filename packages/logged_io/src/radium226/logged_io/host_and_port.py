from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class HostAndPort():

    host: str
    port: int

    def as_tuple(self) -> tuple[str, int]:
        return (self.host, self.port)

    @classmethod
    def from_address(cls, address: Any) -> "HostAndPort | Any":
        # AF_INET gives (host, port), AF_INET6 gives (host, port, flowinfo, scope_id)
        if isinstance(address, tuple) and len(address) >= 2:
            return HostAndPort(address[0], address[1])
        return address

    @classmethod
    def parse_address(cls, address: str) -> "HostAndPort":
        host, _, port = address.rpartition(":")
        return HostAndPort(host.removeprefix("[").removesuffix("]"), int(port))

    def __str__(self):
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"
