"""
OneSky Platform API client.

This module resolves resource actions against the route table, signs each
request with the API's time-based MD5 hash and returns the raw response
body to the caller.
"""

import contextlib
import hashlib
import json
import logging
import os
import time
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlencode

import requests

from . import routes
from .constants import (
    CONTENT_TYPE_JSON,
    DEFAULT_CONFIG,
    HEADER_CONTENT_TYPE,
    PARAM_API_KEY,
    PARAM_DEV_HASH,
    PARAM_TIMESTAMP
)
from .exceptions import (
    ConfigurationError,
    InvalidCredentialsError,
    MissingParameterError,
    TransportError
)
from .request import RequestDescriptor

logger = logging.getLogger(__name__)


def _query_pairs(params: Dict[Any, Any], prefix: Optional[str] = None):
    """
    Flatten params into query pairs the way the platform API expects.

    None values are dropped, booleans become 1/0 and lists or dicts use
    bracketed keys (``locales[0]=fr``, ``filter[type]=yml``).
    """
    for key, value in params.items():
        name = f"{prefix}[{key}]" if prefix is not None else str(key)
        if value is None:
            continue
        if isinstance(value, dict):
            yield from _query_pairs(value, name)
        elif isinstance(value, (list, tuple)):
            yield from _query_pairs(dict(enumerate(value)), name)
        elif isinstance(value, bool):
            yield name, int(value)
        else:
            yield name, value


class ResourceProxy:
    """
    Bound accessor for one resource of a client.

    Example:
        client.projects("show", project_id=999)
    """

    def __init__(self, client: "OneSkyClient", resource: str):
        self.client = client
        self.resource = resource

    @property
    def actions(self) -> List[str]:
        """Actions declared for this resource."""
        return routes.get_actions(self.resource)

    def __call__(self, action: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> Union[str, bytes]:
        return self.client.invoke(self.resource, action, params, **kwargs)


class OneSkyClient:
    """
    Client for the OneSky Platform API version 1.

    Every call is resolved from a static route table, signed with
    ``api_key``/``timestamp``/``dev_hash`` query parameters and sent over a
    fresh HTTP session. Response bodies are returned unparsed.
    """

    def __init__(self, api_key: str = "", secret: str = "", **config):
        """
        Initialize OneSky client.

        Credentials may be empty here and set later; they are checked when a
        request is signed.

        Args:
            api_key: OneSky API public key
            secret: OneSky API secret
            **config: Configuration options (endpoint, timeout)
        """
        self.api_key = api_key
        self.secret = secret

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        self._validate_config()
        self.endpoint = self.config['endpoint'].rstrip('/')

    def _validate_config(self):
        """Validate client configuration."""
        if not self.config['endpoint']:
            raise ConfigurationError("endpoint cannot be empty")

        timeout = self.config['timeout']
        if timeout is not None and timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    def set_api_key(self, api_key: str) -> "OneSkyClient":
        """Set the API key and return the client for chaining."""
        self.api_key = api_key
        return self

    def set_secret(self, secret: str) -> "OneSkyClient":
        """Set the API secret and return the client for chaining."""
        self.secret = secret
        return self

    # Route table introspection

    def get_resources(self) -> List[str]:
        """Return the names of all declared resources."""
        return routes.get_resources()

    def get_actions_by_resource(self, resource: str) -> List[str]:
        """
        Return the actions of a resource.

        Raises:
            UnknownResourceError: If the resource is not declared
        """
        return routes.get_actions(resource)

    def is_multipart_action(self, resource: str, action: str) -> bool:
        """Determine if the action uploads a file as multipart form data."""
        return routes.is_multipart_action(resource, action)

    def is_export_file_action(self, resource: str, action: str) -> bool:
        """Determine if the action downloads a file."""
        return routes.is_export_file_action(resource, action)

    # Signing

    def _verify_credentials(self):
        if not self.api_key or not self.secret:
            raise InvalidCredentialsError("Invalid authenticate data of api key or secret")

    def dev_hash(self, timestamp: int) -> str:
        """
        Compute the request signature for a timestamp.

        Format: MD5(timestamp + secret), lowercase hex. MD5 is mandated by
        the OneSky API.

        Args:
            timestamp: Unix time in seconds

        Returns:
            Hex-encoded MD5 digest
        """
        message = f"{timestamp}{self.secret}"
        return hashlib.md5(message.encode('utf-8')).hexdigest()

    def auth_query_string(self, params: Optional[Dict[str, Any]] = None) -> str:
        """
        Build the signed query string for one request.

        A new timestamp is taken on every call.

        Args:
            params: Extra parameters appended after the auth parameters (GET)

        Returns:
            Query string starting with '?'

        Raises:
            InvalidCredentialsError: If api key or secret is empty
        """
        self._verify_credentials()

        timestamp = int(time.time())
        query = '?' + urlencode([
            (PARAM_API_KEY, self.api_key),
            (PARAM_TIMESTAMP, timestamp),
            (PARAM_DEV_HASH, self.dev_hash(timestamp)),
        ])

        pairs = list(_query_pairs(params or {}))
        if pairs:
            query += '&' + urlencode(pairs)

        return query

    # Dispatch

    def prepare_request(self, resource: str, action: str,
                        params: Optional[Dict[str, Any]] = None, **kwargs) -> RequestDescriptor:
        """
        Resolve and sign a resource action without sending it.

        Args:
            resource: Resource name, e.g. "projects"
            action: Action name, e.g. "show"
            params: Path, query and body parameters
            **kwargs: Extra parameters merged over params

        Returns:
            RequestDescriptor ready to execute

        Raises:
            UnknownResourceError: If the resource is not declared
            UnknownActionError: If the action is not declared for the resource
            MissingParameterError: If a path parameter or upload file is missing
            InvalidCredentialsError: If api key or secret is empty
        """
        route = routes.get_route(resource, action)
        path, remaining = routes.resolve_path(route, {**(params or {}), **kwargs})

        request = RequestDescriptor(
            method=route.method,
            url=self.endpoint + path,
            path=path,
            params=remaining,
            is_multipart=routes.is_multipart_action(resource, action),
            is_file_download=routes.is_export_file_action(resource, action),
            file_field=routes.multipart_file_field(resource, action),
        )

        if request.is_multipart:
            if remaining.get(request.file_field) is None:
                raise MissingParameterError(request.file_field)
        else:
            request.headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON

        if route.method == 'GET':
            request.url += self.auth_query_string(remaining)
        else:
            request.url += self.auth_query_string()
            if not request.is_multipart:
                request.body = json.dumps(remaining, separators=(',', ':'))

        return request

    def invoke(self, resource: str, action: str,
               params: Optional[Dict[str, Any]] = None, **kwargs) -> Union[str, bytes]:
        """
        Call a resource action and return the raw response body.

        Example:
            client.invoke("projects", "show", {"project_id": 999})
            client.invoke("files", "upload", project_id=1099,
                          file="path/to/string.yml", file_format="YAML")

        Returns:
            Response bytes for file download actions, response text otherwise.
            HTTP error statuses are not inspected.

        Raises:
            UnknownResourceError, UnknownActionError, MissingParameterError,
            InvalidCredentialsError, TransportError
        """
        request = self.prepare_request(resource, action, params, **kwargs)
        logger.debug(
            "OneSky %s.%s -> %s %s (multipart=%s, download=%s)",
            resource, action, request.method, request.path,
            request.is_multipart, request.is_file_download
        )
        return self.execute(request)

    # Transport

    def execute(self, request: RequestDescriptor) -> Union[str, bytes]:
        """
        Send a prepared request over a fresh HTTP session.

        Raises:
            TransportError: If the request fails at the network level
        """
        kwargs = {
            'headers': request.headers,
            'timeout': self.config['timeout'],
        }

        with contextlib.ExitStack() as stack:
            if request.is_multipart:
                form = dict(request.params)
                file_ref = form.pop(request.file_field)
                kwargs['data'] = form
                kwargs['files'] = {request.file_field: self._open_file(file_ref, stack)}
            elif request.body is not None:
                kwargs['data'] = request.body.encode('utf-8')

            try:
                with requests.Session() as session:
                    response = session.request(request.method, request.url, **kwargs)
            except requests.RequestException as e:
                raise TransportError(f"HTTP request failed: {e}") from e

        logger.debug("OneSky %s %s returned %s", request.method, request.path, response.status_code)

        if request.is_file_download:
            return response.content
        return response.text

    @staticmethod
    def _open_file(file_ref: Any, stack: contextlib.ExitStack):
        """
        Turn a path or open binary file into a requests file tuple.

        Raises:
            TransportError: If the path cannot be opened
        """
        if hasattr(file_ref, 'read'):
            # Descriptor-backed files have an int name
            name = getattr(file_ref, 'name', None)
            if isinstance(name, (str, os.PathLike)) and os.path.basename(os.fspath(name)):
                return os.path.basename(os.fspath(name)), file_ref
            return 'file', file_ref

        path = os.fspath(file_ref)
        try:
            handle = stack.enter_context(open(path, 'rb'))
        except OSError as e:
            raise TransportError(f"Cannot read upload file {path}: {e}") from e
        return os.path.basename(path), handle

    # Resource accessors

    @property
    def project_groups(self) -> ResourceProxy:
        return ResourceProxy(self, 'project_groups')

    @property
    def projects(self) -> ResourceProxy:
        return ResourceProxy(self, 'projects')

    @property
    def files(self) -> ResourceProxy:
        return ResourceProxy(self, 'files')

    @property
    def translations(self) -> ResourceProxy:
        return ResourceProxy(self, 'translations')

    @property
    def import_tasks(self) -> ResourceProxy:
        return ResourceProxy(self, 'import_tasks')

    @property
    def quotations(self) -> ResourceProxy:
        return ResourceProxy(self, 'quotations')

    @property
    def orders(self) -> ResourceProxy:
        return ResourceProxy(self, 'orders')

    @property
    def locales(self) -> ResourceProxy:
        return ResourceProxy(self, 'locales')

    @property
    def project_types(self) -> ResourceProxy:
        return ResourceProxy(self, 'project_types')

    @property
    def phrase_collections(self) -> ResourceProxy:
        return ResourceProxy(self, 'phrase_collections')
