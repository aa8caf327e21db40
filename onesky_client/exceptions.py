"""
Custom exceptions for the OneSky client library.
"""


class OneSkyClientError(Exception):
    """Base exception for OneSky client errors."""
    pass


class UnknownResourceError(OneSkyClientError):
    """Raised when a resource is not part of the route table."""
    pass


class UnknownActionError(OneSkyClientError):
    """Raised when a resource does not declare the requested action."""
    pass


class MissingParameterError(OneSkyClientError):
    """Raised when a path placeholder has no value in the request parameters."""

    def __init__(self, name: str):
        super().__init__(f"Missing parameter: {name}")
        self.name = name


class InvalidCredentialsError(OneSkyClientError):
    """Raised when the API key or secret is empty at signing time."""
    pass


class ConfigurationError(OneSkyClientError):
    """Raised when client configuration is invalid."""
    pass


class TransportError(OneSkyClientError):
    """Raised when the HTTP request fails at the network level."""
    pass
