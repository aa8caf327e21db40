"""
OneSky Client Library

A Python client library for the OneSky Platform API (version 1). Requests
are resolved from a static route table, signed with the API's time-based
hash and answered with the raw response body.

Example usage:
    from onesky_client import OneSkyClient

    client = OneSkyClient("your-api-key", "your-api-secret")
    body = client.projects("show", project_id=999)
"""

from .client import OneSkyClient, ResourceProxy
from .exceptions import (
    OneSkyClientError,
    UnknownResourceError,
    UnknownActionError,
    MissingParameterError,
    InvalidCredentialsError,
    ConfigurationError,
    TransportError
)
from .constants import (
    ENDPOINT,
    PARAM_API_KEY,
    PARAM_TIMESTAMP,
    PARAM_DEV_HASH,
    DEFAULT_CONFIG
)
from .request import RequestDescriptor
from .routes import Route, ROUTES

__version__ = "1.0.0"
__all__ = [
    "OneSkyClient",
    "ResourceProxy",
    "RequestDescriptor",
    "Route",
    "ROUTES",
    "OneSkyClientError",
    "UnknownResourceError",
    "UnknownActionError",
    "MissingParameterError",
    "InvalidCredentialsError",
    "ConfigurationError",
    "TransportError",
    "ENDPOINT",
    "PARAM_API_KEY",
    "PARAM_TIMESTAMP",
    "PARAM_DEV_HASH",
    "DEFAULT_CONFIG"
]
