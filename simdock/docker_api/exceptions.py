"""
Docker API Exceptions
"""


class DockerException(Exception):
    """Base Docker exception"""
    pass


class TransportError(DockerException):
    """Socket unreachable, connection refused or request timed out"""
    pass


class APIError(DockerException):
    """Docker API error"""

    def __init__(self, message, response=None, status_code=None):
        super().__init__(message)
        self.response = response
        self.status_code = status_code


class UnexpectedStatusError(APIError):
    """Daemon answered with a status other than the expected success code"""

    def __init__(self, expected: int, status_code: int, response=None):
        expected, status_code = int(expected), int(status_code)
        super().__init__(
            f"invalid response code want={expected}, got={status_code}",
            response=response,
            status_code=status_code
        )
        self.expected = expected


class DecodeError(DockerException):
    """Response body does not have the expected JSON shape"""
    pass


class NotFound(DockerException):
    """No entry matched the requested name"""
    pass


class ContainerNotFound(NotFound):
    """Container not found"""
    pass


class NetworkNotFound(NotFound):
    """Network not found"""
    pass
