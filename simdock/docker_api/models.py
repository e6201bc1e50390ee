"""
Docker API request and response models

Request models serialize to the exact shape the daemon expects. Response
models are lenient: missing or null fields fall back to empty values and keys
are matched case-insensitively, so both ``ID`` and ``Id`` are accepted. A
field of the wrong JSON type raises DecodeError.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar

from .exceptions import DecodeError

T = TypeVar('T')


def _field(data: Dict[str, Any], key: str, default: Any = None) -> Any:
    if key in data:
        return data[key]
    lowered = key.lower()
    for name, value in data.items():
        if name.lower() == lowered:
            return value
    return default


def _string(value: Any, what: str) -> str:
    # JSON null decodes to the empty string
    if value is None:
        return ''
    if not isinstance(value, str):
        raise DecodeError(f"expected string for {what}, got {type(value).__name__}")
    return value


def _string_field(data: Dict[str, Any], key: str) -> str:
    return _string(_field(data, key), key)


def _list_field(data: Dict[str, Any], key: str) -> List[Any]:
    values = _field(data, key)
    if values is None:
        return []
    if not isinstance(values, list):
        raise DecodeError(f"expected JSON array for {key}, got {type(values).__name__}")
    return values


def _string_list_field(data: Dict[str, Any], key: str) -> List[str]:
    return [_string(value, key) for value in _list_field(data, key)]


def _expect_dict(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise DecodeError(f"expected JSON object for {what}, got {type(data).__name__}")
    return data


def decode_list(data: Any, model: Type[T]) -> List[T]:
    """
    Decode a JSON array into a list of response models

    Args:
        data: Decoded JSON payload
        model: Model class with a from_dict classmethod

    Returns:
        List of model instances, in payload order
    """
    if data is None:
        return []
    if not isinstance(data, list):
        raise DecodeError(f"expected JSON array of {model.__name__}, got {type(data).__name__}")
    return [model.from_dict(item) for item in data]


def find_first_match(summaries: Iterable[T], name: str) -> Optional[T]:
    """Return the first summary (in list order) whose name contains `name`"""
    for summary in summaries:
        if summary.matches(name):
            return summary
    return None


@dataclass
class ContainerSummary:
    """Entry of GET /containers/json"""

    id: str = ''
    status: str = ''
    image: str = ''
    names: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'ContainerSummary':
        data = _expect_dict(data, 'container')
        return cls(
            id=_string_field(data, 'ID'),
            status=_string_field(data, 'Status'),
            image=_string_field(data, 'Image'),
            names=_string_list_field(data, 'Names'),
        )

    def matches(self, name: str) -> bool:
        # Names are path-like ("/house"), so this is a plain substring test
        return any(name in candidate for candidate in self.names)


@dataclass
class NetworkSummary:
    """Entry of GET /networks"""

    driver: str = ''
    id: str = ''
    name: str = ''

    @classmethod
    def from_dict(cls, data: Any) -> 'NetworkSummary':
        data = _expect_dict(data, 'network')
        return cls(
            driver=_string_field(data, 'Driver'),
            id=_string_field(data, 'ID'),
            name=_string_field(data, 'Name'),
        )

    def matches(self, name: str) -> bool:
        return name in self.name


@dataclass
class CreateResult:
    """Body of a 201 answer from /containers/create or /networks/create"""

    id: str = ''
    warnings: List[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'CreateResult':
        data = _expect_dict(data, 'create result')
        return cls(
            id=_string_field(data, 'Id'),
            warnings=_list_field(data, 'Warnings'),
        )


@dataclass
class MountSpec:
    """Bind mount of a host path into a container"""

    source: str = ''
    target: str = ''
    type: str = ''
    consistency: str = ''
    read_only: bool = False

    @classmethod
    def parse(cls, entry: str) -> 'MountSpec':
        """
        Parse a "source:target" string into a bind mount

        Entries that do not split into exactly two parts give the empty
        MountSpec, so the position in the mounts list is kept.

        Args:
            entry: Mount definition, e.g. "/var/run/docker.sock:/var/run/docker.sock"

        Returns:
            MountSpec object
        """
        parts = entry.split(':')
        if len(parts) != 2:
            return cls()
        return cls(source=parts[0], target=parts[1], type='bind', consistency='default')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'Target': self.target,
            'Source': self.source,
            'ReadOnly': self.read_only,
            'Type': self.type,
            'Consistency': self.consistency,
        }


@dataclass
class ContainerCreateRequest:
    """Body of POST /containers/create"""

    name: str
    image: str
    cmd: Optional[List[str]] = None
    exposed_ports: List[str] = field(default_factory=list)
    mounts: List[MountSpec] = field(default_factory=list)

    @classmethod
    def build(cls, name: str, image: str, cmd: Optional[List[str]] = None,
              exposed_ports: Optional[List[str]] = None,
              mounts: Optional[List[str]] = None) -> 'ContainerCreateRequest':
        """
        Build a create request from the plain string options

        Args:
            name: Container name
            image: Image name or ID
            cmd: Command overriding the image default, e.g. ["sleep", "3600"]
            exposed_ports: Ports as "<port>/<tcp|udp>"
            mounts: Bind mounts as "source:target"

        Returns:
            ContainerCreateRequest object
        """
        return cls(
            name=name,
            image=image,
            cmd=list(cmd) if cmd else None,
            exposed_ports=list(exposed_ports or []),
            mounts=[MountSpec.parse(m) for m in mounts or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        config: Dict[str, Any] = {'Name': self.name}
        if self.exposed_ports:
            # The API models a set of ports as a mapping to empty objects
            config['ExposedPorts'] = {port: {} for port in self.exposed_ports}
        config['Image'] = self.image
        if self.cmd:
            config['Cmd'] = list(self.cmd)

        host_config: Dict[str, Any] = {}
        if self.mounts:
            host_config['Mounts'] = [m.to_dict() for m in self.mounts]
        config['HostConfig'] = host_config

        return config


@dataclass
class NetworkCreateRequest:
    """Body of POST /networks/create"""

    name: str
    driver: str = 'bridge'
    attachable: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'Name': self.name,
            'Driver': self.driver,
            'Attachable': self.attachable,
        }


@dataclass
class ConnectRequest:
    """Body of POST /networks/{id}/connect"""

    container: str
    aliases: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'Container': self.container,
            'EndpointConfig': {
                'Aliases': list(self.aliases) if self.aliases is not None else None,
            },
        }


@dataclass
class DisconnectRequest:
    """Body of POST /networks/{id}/disconnect"""

    container: str

    def to_dict(self) -> Dict[str, Any]:
        return {'Container': self.container}


@dataclass
class InspectResult:
    """The part of GET /containers/{id}/json that is consumed"""

    labels: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> 'InspectResult':
        data = _expect_dict(data, 'container inspect')
        config = _field(data, 'Config') or {}
        config = _expect_dict(config, 'container config')
        labels = _expect_dict(_field(config, 'Labels') or {}, 'container labels')
        return cls(labels={key: _string(value, key) for key, value in labels.items()})
