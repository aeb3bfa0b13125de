"""
Environment detection - decides whether submissions go to the server or to a local file.

A page is considered local when it was loaded from the filesystem or is served
from a loopback/empty host. Everything else is server mode.
"""
import enum
from dataclasses import dataclass
from urllib.parse import urlsplit

LOCAL_HOSTNAMES = frozenset({"", "localhost", "127.0.0.1"})
FILE_PROTOCOL = "file:"


class EnvironmentMode(str, enum.Enum):
    LOCAL = "local"
    SERVER = "server"


@dataclass(frozen=True)
class Location:
    """Where the experiment page is being served from."""

    protocol: str = ""
    hostname: str = ""

    @classmethod
    def from_url(cls, url: str) -> "Location":
        """
        Build a location from a page URL.

        Examples:
            Location.from_url("https://lab.example.org/exp") → Location("https:", "lab.example.org")
            Location.from_url("file:///home/me/exp.html") → Location("file:", "")
            Location.from_url("") → Location("", "")
        """
        if not url:
            return cls()

        parts = urlsplit(url)
        protocol = f"{parts.scheme}:" if parts.scheme else ""
        return cls(protocol=protocol, hostname=parts.hostname or "")


def detect_environment(location: Location) -> EnvironmentMode:
    """Classify a location as local or server."""
    if location.protocol == FILE_PROTOCOL or location.hostname in LOCAL_HOSTNAMES:
        return EnvironmentMode.LOCAL
    return EnvironmentMode.SERVER
