"""
Docker Containers API
"""

import http.client
import logging
from typing import List, Dict, Optional

from .exceptions import ContainerNotFound
from .models import (
    ContainerCreateRequest,
    ContainerSummary,
    CreateResult,
    InspectResult,
    decode_list,
    find_first_match,
)

logger = logging.getLogger(__name__)


class ContainerCollection:
    """Docker Containers collection"""

    def __init__(self, client):
        self.client = client

    def list(self) -> List[ContainerSummary]:
        """
        List running containers

        Returns:
            List of ContainerSummary objects, in daemon order
        """
        response = self.client.http.get('/containers/json')
        return decode_list(response.json(), ContainerSummary)

    def id_by_name(self, name: str) -> str:
        """
        Resolve a container name to its ID

        The first container (in list order) with any name containing
        `name` wins.

        Args:
            name: Container name or part of it

        Returns:
            Container ID

        Raises:
            ContainerNotFound: If no container name contains `name`
        """
        container = find_first_match(self.list(), name)
        if container is None:
            raise ContainerNotFound(f"can not extract containerID for {name}")
        return container.id

    def create(self, name: str, image: str, cmd: Optional[List[str]] = None,
               exposed_ports: Optional[List[str]] = None,
               mounts: Optional[List[str]] = None) -> str:
        """
        Create container

        Only the options needed by the simulator are supported; anything
        left empty falls back to the image defaults.

        Args:
            name: Container name
            image: Image name or ID
            cmd: Command to run, e.g. ["sleep", "3600"]
            exposed_ports: Ports to expose, e.g. ["80/tcp", "53/udp"]
            mounts: Bind mounts, e.g. ["/var/run/docker.sock:/var/run/docker.sock"]

        Returns:
            ID of the new container
        """
        config = ContainerCreateRequest.build(
            name, image, cmd=cmd, exposed_ports=exposed_ports, mounts=mounts
        )
        response = self.client.http.post(
            '/containers/create',
            params={'name': name},
            data=config.to_dict(),
            expected_status=http.client.CREATED
        )
        result = CreateResult.from_dict(response.json())

        logger.info(f"Container {name} created: {result.id[:12]}")
        return result.id

    def remove(self, container_id: str):
        """Remove container"""
        self.client.http.delete(
            f'/containers/{container_id}',
            expected_status=http.client.NO_CONTENT
        )
        logger.info(f"Container {container_id[:12]} removed")

    def start(self, container_id: str):
        """Start container"""
        self.client.http.post(
            f'/containers/{container_id}/start',
            expected_status=http.client.NO_CONTENT
        )

    def stop(self, container_id: str):
        """Stop container"""
        self.client.http.post(
            f'/containers/{container_id}/stop',
            expected_status=http.client.NO_CONTENT
        )

    def labels(self, container_id: str) -> Dict[str, str]:
        """
        Get container labels

        Args:
            container_id: Container ID

        Returns:
            Dict of all labels set on the container
        """
        response = self.client.http.get(f'/containers/{container_id}/json')
        return InspectResult.from_dict(response.json()).labels
