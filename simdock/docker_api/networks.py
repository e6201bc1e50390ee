"""
Docker Networks API
"""

import http.client
import logging
from typing import List, Optional

from .exceptions import NetworkNotFound
from .models import (
    ConnectRequest,
    CreateResult,
    DisconnectRequest,
    NetworkCreateRequest,
    NetworkSummary,
    decode_list,
    find_first_match,
)

logger = logging.getLogger(__name__)


class NetworkCollection:
    """Docker Networks Collection"""

    def __init__(self, client):
        self.client = client

    def list(self) -> List[NetworkSummary]:
        """
        List networks

        Returns:
            List of NetworkSummary objects, in daemon order
        """
        response = self.client.http.get('/networks')
        return decode_list(response.json(), NetworkSummary)

    def id_by_name(self, name: str) -> str:
        """
        Resolve a network name to its ID

        Args:
            name: Network name or part of it

        Returns:
            ID of the first network whose name contains `name`

        Raises:
            NetworkNotFound: If no network name contains `name`
        """
        network = find_first_match(self.list(), name)
        if network is None:
            raise NetworkNotFound(f"can not extract networkID for {name}")
        return network.id

    def create(self, name: str) -> str:
        """
        Create an attachable bridge network

        Args:
            name: Network name

        Returns:
            Network ID
        """
        data = NetworkCreateRequest(name=name).to_dict()
        response = self.client.http.post(
            '/networks/create',
            data=data,
            expected_status=http.client.CREATED
        )
        result = CreateResult.from_dict(response.json())

        logger.info(f"Network {name} created: {result.id[:12]}")
        return result.id

    def remove(self, network_id: str):
        """Remove network"""
        self.client.http.delete(
            f'/networks/{network_id}',
            expected_status=http.client.NO_CONTENT
        )
        logger.info(f"Network {network_id[:12]} removed")

    def connect(self, network_id: str, container_id: str,
                aliases: Optional[List[str]] = None):
        """
        Connect container to network

        Args:
            network_id: Network ID
            container_id: Container ID
            aliases: DNS aliases of the container on this network
        """
        data = ConnectRequest(container=container_id, aliases=aliases).to_dict()
        self.client.http.post(f'/networks/{network_id}/connect', data=data)
        logger.info(f"Container {container_id[:12]} connected to network {network_id[:12]}")

    def disconnect(self, network_id: str, container_id: str):
        """
        Disconnect container from network

        Args:
            network_id: Network ID
            container_id: Container ID
        """
        data = DisconnectRequest(container=container_id).to_dict()
        self.client.http.post(f'/networks/{network_id}/disconnect', data=data)
        logger.info(f"Container {container_id[:12]} disconnected from network {network_id[:12]}")
