"""Administrative connector selection for remote hosts.

A host is probed for an open TCP port on each known connector's default
port, in priority order. The first connector whose port accepts a
connection is chosen. An open port is only a reachability signal; callers
that need certainty must complete their own protocol handshake.
"""

import errno
import logging
import socket
from enum import Enum
from typing import NamedTuple

from .config.models import ConnectorConfig
from .errors import UnknownConnector

logger = logging.getLogger(__name__)

DEFAULT_SSH_PORT = 22
DEFAULT_WINRM_PORT = 5985
DEFAULT_PROBE_TIMEOUT = 3.0

# Connect failures that mean "nothing is listening there".
_CLOSED_ERRNOS = frozenset({errno.ECONNREFUSED, errno.EHOSTUNREACH, errno.ENETUNREACH})


class Connector(str, Enum):
    """Protocols used to administer a remote host."""

    SSH = "ssh"
    WINRM = "winrm"


class ConnectorPort(NamedTuple):
    protocol: Connector
    default_port: int


DEFAULT_CONNECTOR_PORTS: tuple[ConnectorPort, ...] = (
    ConnectorPort(Connector.SSH, DEFAULT_SSH_PORT),
    ConnectorPort(Connector.WINRM, DEFAULT_WINRM_PORT),
)


class ConnectorSelector:
    """Pick the first reachable connector for a host."""

    def __init__(
        self,
        ports: tuple[ConnectorPort, ...] | list[ConnectorPort] = DEFAULT_CONNECTOR_PORTS,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
    ) -> None:
        self.ports = tuple(ports)
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: ConnectorConfig) -> "ConnectorSelector":
        return cls(
            ports=(
                ConnectorPort(Connector.SSH, config.ssh_port),
                ConnectorPort(Connector.WINRM, config.winrm_port),
            ),
            timeout=config.timeout,
        )

    def port_open(self, host: str, port: int, timeout: float | None = None) -> bool:
        """Check whether a TCP connection to ``host:port`` succeeds.

        Returns:
            True if the connection was accepted, False if it was refused,
            the host was unreachable, or the attempt timed out.

        Raises:
            OSError: For any other failure, such as a name that does not
                resolve (``socket.gaierror``).
        """
        timeout = self.timeout if timeout is None else timeout
        try:
            with socket.create_connection((host, port), timeout=timeout):
                logger.debug(f"{host}:{port} is open")
                return True
        except (ConnectionRefusedError, TimeoutError) as e:
            logger.debug(f"{host}:{port} is closed: {e}")
            return False
        except OSError as e:
            if e.errno in _CLOSED_ERRNOS:
                logger.debug(f"{host}:{port} is unreachable: {e}")
                return False
            raise

    def best_for(self, host: str) -> Connector:
        """Return the highest-priority connector with an open port on ``host``.

        Raises:
            UnknownConnector: If none of the connector ports are open.
        """
        for protocol, port in self.ports:
            if self.port_open(host, port):
                logger.info(f"Using {protocol.value} connector for {host}")
                return protocol
        raise UnknownConnector(host)


def best_connector_for(host: str) -> Connector:
    """Select a connector for ``host`` using the default port table."""
    return ConnectorSelector().best_for(host)
