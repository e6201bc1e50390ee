"""
Minimal Docker API client - pure Python, no external dependencies
Works with Docker daemon via Unix socket (Linux/macOS)
"""

from .client import DockerClient, new_client
from .exceptions import (
    DockerException,
    TransportError,
    APIError,
    UnexpectedStatusError,
    DecodeError,
    NotFound,
    ContainerNotFound,
    NetworkNotFound
)

__all__ = [
    'DockerClient',
    'new_client',
    'DockerException',
    'TransportError',
    'APIError',
    'UnexpectedStatusError',
    'DecodeError',
    'NotFound',
    'ContainerNotFound',
    'NetworkNotFound'
]
