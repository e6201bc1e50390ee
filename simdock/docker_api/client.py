"""
Docker Client - Main API entry point
"""

import logging
from typing import Dict, List, Optional

from .exceptions import DockerException
from .http_client import DockerHTTPClient, DEFAULT_TIMEOUT
from .containers import ContainerCollection
from .networks import NetworkCollection

logger = logging.getLogger(__name__)


class DockerClient:
    """
    Docker API Client

    Talks to dockerd over its unix socket. Only the calls the simulator
    needs are covered; this is not a complete Docker client.
    """

    def __init__(self, socket_path: str):
        """
        Initialize Docker client

        Args:
            socket_path: Path to the docker socket, e.g. /var/run/docker.sock
        """
        self.http = DockerHTTPClient(socket_path, timeout=DEFAULT_TIMEOUT)
        self.containers = ContainerCollection(self)
        self.networks = NetworkCollection(self)

    @classmethod
    def from_settings(cls, settings=None) -> 'DockerClient':
        """
        Create a client for the socket configured in the user settings

        The configured log level is applied as well.

        Args:
            settings: SettingsManager instance (default: load user settings)
        """
        from ..settings_manager import SettingsManager, configure_logging, default_socket_path

        if settings is None:
            settings = SettingsManager()
        configure_logging(settings.get('log_level') or 'INFO')
        return cls(settings.get('docker_socket_path') or default_socket_path())

    def __repr__(self):
        return f"<DockerClient: {self.http.socket_path}>"

    def ping(self) -> bool:
        """
        Ping Docker daemon

        Returns:
            True if the daemon answered 200, False on any failure
        """
        try:
            self.http.get('/_ping')
            return True
        except DockerException as e:
            logger.debug(f"Docker ping failed: {e}")
            return False

    def container_id_by_name(self, name: str) -> str:
        """Return the ID of the first container whose name contains `name`"""
        return self.containers.id_by_name(name)

    def create_container(self, name: str, image: str, cmd: Optional[List[str]] = None,
                         exposed_ports: Optional[List[str]] = None,
                         mounts: Optional[List[str]] = None) -> str:
        """Create container and return its ID"""
        return self.containers.create(
            name, image, cmd=cmd, exposed_ports=exposed_ports, mounts=mounts
        )

    def delete_container(self, container_id: str):
        """Remove container"""
        self.containers.remove(container_id)

    def start_container(self, container_id: str):
        """Start container"""
        self.containers.start(container_id)

    def stop_container(self, container_id: str):
        """Stop container"""
        self.containers.stop(container_id)

    def network_id_by_name(self, name: str) -> str:
        """Return the ID of the first network whose name contains `name`"""
        return self.networks.id_by_name(name)

    def create_network(self, name: str) -> str:
        """Create an attachable bridge network and return its ID"""
        return self.networks.create(name)

    def delete_network(self, network_id: str):
        """Remove network"""
        self.networks.remove(network_id)

    def connect_network(self, network_id: str, container_id: str,
                        aliases: Optional[List[str]] = None):
        """Connect container to network (network first, container second)"""
        self.networks.connect(network_id, container_id, aliases)

    def disconnect_network(self, network_id: str, container_id: str):
        """Disconnect container from network (network first, container second)"""
        self.networks.disconnect(network_id, container_id)

    def labels(self, container_id: str) -> Dict[str, str]:
        """Get labels of container"""
        return self.containers.labels(container_id)


def new_client(socket_path: str) -> DockerClient:
    """
    Create a Docker client for the given socket

    The socket is not opened until the first request.
    e.g.: client = new_client('/var/run/docker.sock')
    """
    return DockerClient(socket_path)
