"""
simdock - control dockerd from the network simulator
"""

from .docker_api import DockerClient, new_client

__all__ = ['DockerClient', 'new_client']

__version__ = '1.0.0'
