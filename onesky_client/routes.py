"""
Route table for the OneSky Platform API.

Each resource declares a fixed set of actions, and every action maps to an
HTTP method plus a path template with ``:name`` placeholders. The table is
static; nothing registers routes at runtime.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple
from urllib.parse import quote

from .constants import HTTP_METHODS
from .exceptions import (
    MissingParameterError,
    UnknownActionError,
    UnknownResourceError
)

PLACEHOLDER_PATTERN = re.compile(r":(\w+)")

# See https://github.com/onesky/api-documentation-platform for each resource.
_RESOURCES = {
    'project_groups': {
        'list':      'GET /project-groups',
        'show':      'GET /project-groups/:project_group_id',
        'create':    'POST /project-groups',
        'delete':    'DELETE /project-groups/:project_group_id',
        'languages': 'GET /project-groups/:project_group_id/languages',
    },
    'projects': {
        'list':      'GET /project-groups/:project_group_id/projects',
        'show':      'GET /projects/:project_id',
        'create':    'POST /project-groups/:project_group_id/projects',
        'update':    'PUT /projects/:project_id',
        'delete':    'DELETE /projects/:project_id',
        'languages': 'GET /projects/:project_id/languages',
    },
    'files': {
        'list':      'GET /projects/:project_id/files',
        'upload':    'POST /projects/:project_id/files',
        'delete':    'DELETE /projects/:project_id/files',
    },
    'translations': {
        'export':    'GET /projects/:project_id/translations',
        'status':    'GET /projects/:project_id/translations/status',
    },
    'import_tasks': {
        'show':      'GET /projects/:project_id/import-tasks/:import_id',
    },
    'quotations': {
        'show':      'GET /projects/:project_id/quotations',
    },
    'orders': {
        'list':      'GET /projects/:project_id/orders',
        'show':      'GET /projects/:project_id/orders/:order_id',
        'create':    'POST /projects/:project_id/orders',
    },
    'locales': {
        'list':      'GET /locales',
    },
    'project_types': {
        'list':      'GET /project-types',
    },
    'phrase_collections': {
        'list':      'GET /projects/:project_id/phrase-collections',
        'show':      'GET /projects/:project_id/phrase-collections/show',
        'import':    'POST /projects/:project_id/phrase-collections',
        'delete':    'DELETE /projects/:project_id/phrase-collections',
    },
}

# Actions uploading a file as multipart form data, mapped to the file field
MULTIPART_ACTIONS = {
    ('files', 'upload'): 'file',
}

# Actions whose response body is a downloaded file rather than JSON
EXPORT_FILE_ACTIONS = frozenset([
    ('translations', 'export'),
])


@dataclass(frozen=True)
class Route:
    """A single resource action bound to an HTTP method and path template."""

    resource: str
    action: str
    method: str
    path: str

    @property
    def placeholders(self) -> List[str]:
        """Placeholder names in order of appearance."""
        return PLACEHOLDER_PATTERN.findall(self.path)


def _parse_route(resource: str, action: str, spec: str) -> Route:
    method, path = spec.split(' ', 1)
    if method not in HTTP_METHODS:
        raise ValueError(f"Unsupported method {method!r} for {resource}.{action}")
    return Route(resource, action, method, path)


ROUTES: Dict[str, Dict[str, Route]] = {
    resource: {
        action: _parse_route(resource, action, spec)
        for action, spec in actions.items()
    }
    for resource, actions in _RESOURCES.items()
}


def get_resources() -> List[str]:
    """Return declared resource names in table order."""
    return list(ROUTES)


def get_actions(resource: str) -> List[str]:
    """
    Return the actions declared for a resource.

    Raises:
        UnknownResourceError: If the resource is not declared
    """
    if resource not in ROUTES:
        raise UnknownResourceError(f"Invalid resource: {resource}")
    return list(ROUTES[resource])


def get_route(resource: str, action: str) -> Route:
    """
    Look up the route for a resource action.

    Raises:
        UnknownResourceError: If the resource is not declared
        UnknownActionError: If the resource does not declare the action
    """
    if resource not in ROUTES:
        raise UnknownResourceError(f"Invalid resource: {resource}")

    actions = ROUTES[resource]
    if action not in actions:
        raise UnknownActionError(f"Invalid resource action: {resource}.{action}")
    return actions[action]


def is_multipart_action(resource: str, action: str) -> bool:
    """Determine if the action uploads a file as multipart form data."""
    return (resource, action) in MULTIPART_ACTIONS


def is_export_file_action(resource: str, action: str) -> bool:
    """Determine if the action downloads a file."""
    return (resource, action) in EXPORT_FILE_ACTIONS


def multipart_file_field(resource: str, action: str) -> Optional[str]:
    """Name of the form field carrying the file, or None for non-multipart actions."""
    return MULTIPART_ACTIONS.get((resource, action))


def resolve_path(route: Route, params: Optional[Mapping[str, Any]] = None) -> Tuple[str, Dict[str, Any]]:
    """
    Substitute path placeholders from params.

    The caller's mapping is left untouched; the returned dict is a copy
    without the keys consumed by the path.

    Args:
        route: Route to resolve
        params: Request parameters

    Returns:
        Tuple of (path, remaining params)

    Raises:
        MissingParameterError: If a placeholder has no value
    """
    remaining = dict(params or {})
    values = {}

    for name in route.placeholders:
        if name in values:
            continue
        if remaining.get(name) is None:
            raise MissingParameterError(name)
        values[name] = str(remaining.pop(name))

    path = PLACEHOLDER_PATTERN.sub(
        lambda match: quote(values[match.group(1)], safe=''),
        route.path
    )
    return path, remaining
