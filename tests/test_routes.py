"""
Unit tests for the OneSky route table.
"""

import pytest

from onesky_client import (
    MissingParameterError,
    UnknownActionError,
    UnknownResourceError
)
from onesky_client import routes


DECLARED_ROUTES = [
    ('project_groups', 'list', 'GET', '/project-groups'),
    ('project_groups', 'show', 'GET', '/project-groups/:project_group_id'),
    ('project_groups', 'create', 'POST', '/project-groups'),
    ('project_groups', 'delete', 'DELETE', '/project-groups/:project_group_id'),
    ('project_groups', 'languages', 'GET', '/project-groups/:project_group_id/languages'),
    ('projects', 'list', 'GET', '/project-groups/:project_group_id/projects'),
    ('projects', 'show', 'GET', '/projects/:project_id'),
    ('projects', 'create', 'POST', '/project-groups/:project_group_id/projects'),
    ('projects', 'update', 'PUT', '/projects/:project_id'),
    ('projects', 'delete', 'DELETE', '/projects/:project_id'),
    ('projects', 'languages', 'GET', '/projects/:project_id/languages'),
    ('files', 'list', 'GET', '/projects/:project_id/files'),
    ('files', 'upload', 'POST', '/projects/:project_id/files'),
    ('files', 'delete', 'DELETE', '/projects/:project_id/files'),
    ('translations', 'export', 'GET', '/projects/:project_id/translations'),
    ('translations', 'status', 'GET', '/projects/:project_id/translations/status'),
    ('import_tasks', 'show', 'GET', '/projects/:project_id/import-tasks/:import_id'),
    ('quotations', 'show', 'GET', '/projects/:project_id/quotations'),
    ('orders', 'list', 'GET', '/projects/:project_id/orders'),
    ('orders', 'show', 'GET', '/projects/:project_id/orders/:order_id'),
    ('orders', 'create', 'POST', '/projects/:project_id/orders'),
    ('locales', 'list', 'GET', '/locales'),
    ('project_types', 'list', 'GET', '/project-types'),
    ('phrase_collections', 'list', 'GET', '/projects/:project_id/phrase-collections'),
    ('phrase_collections', 'show', 'GET', '/projects/:project_id/phrase-collections/show'),
    ('phrase_collections', 'import', 'POST', '/projects/:project_id/phrase-collections'),
    ('phrase_collections', 'delete', 'DELETE', '/projects/:project_id/phrase-collections'),
]


class TestRouteTable:
    """Test route lookup."""

    @pytest.mark.parametrize("resource,action,method,path", DECLARED_ROUTES)
    def test_declared_route(self, resource, action, method, path):
        """Test every declared route resolves to its method and template verbatim."""
        route = routes.get_route(resource, action)

        assert route.resource == resource
        assert route.action == action
        assert route.method == method
        assert route.path == path

    def test_table_is_closed(self):
        """Test the table holds exactly the declared routes."""
        declared = {(r, a) for r, a, _, _ in DECLARED_ROUTES}
        table = {(r, a) for r in routes.ROUTES for a in routes.ROUTES[r]}

        assert table == declared

    def test_get_resources(self):
        """Test resource listing keeps table order."""
        assert routes.get_resources() == [
            'project_groups', 'projects', 'files', 'translations', 'import_tasks',
            'quotations', 'orders', 'locales', 'project_types', 'phrase_collections'
        ]

    def test_get_actions(self):
        """Test action listing for a resource."""
        assert routes.get_actions('orders') == ['list', 'show', 'create']
        assert routes.get_actions('locales') == ['list']

    def test_get_actions_unknown_resource(self):
        """Test action listing raises for an undeclared resource."""
        with pytest.raises(UnknownResourceError):
            routes.get_actions('frobnicate')

    def test_unknown_resource(self):
        """Test lookup of an undeclared resource."""
        with pytest.raises(UnknownResourceError):
            routes.get_route('frobnicate', 'list')

    def test_unknown_action(self):
        """Test lookup of an undeclared action on a declared resource."""
        with pytest.raises(UnknownActionError):
            routes.get_route('locales', 'delete')

    def test_error_kinds_are_distinct(self):
        """Test unknown resource and unknown action are not interchangeable."""
        assert not issubclass(UnknownResourceError, UnknownActionError)
        assert not issubclass(UnknownActionError, UnknownResourceError)

    def test_route_is_immutable(self):
        """Test routes cannot be modified."""
        route = routes.get_route('projects', 'show')

        with pytest.raises(AttributeError):
            route.path = '/elsewhere'

    def test_placeholders_in_order(self):
        """Test placeholders are listed left to right."""
        route = routes.get_route('orders', 'show')

        assert route.placeholders == ['project_id', 'order_id']

    def test_action_flags(self):
        """Test multipart and file download flags."""
        assert routes.is_multipart_action('files', 'upload') is True
        assert routes.is_multipart_action('files', 'list') is False
        assert routes.is_export_file_action('translations', 'export') is True
        assert routes.is_export_file_action('translations', 'status') is False
        assert routes.multipart_file_field('files', 'upload') == 'file'
        assert routes.multipart_file_field('orders', 'create') is None


class TestResolvePath:
    """Test path placeholder substitution."""

    def test_resolve_single_placeholder(self):
        """Test substituting one placeholder."""
        route = routes.get_route('projects', 'show')
        path, remaining = routes.resolve_path(route, {'project_id': 999})

        assert path == '/projects/999'
        assert remaining == {}

    def test_resolve_strips_used_keys(self):
        """Test path keys are removed and other keys kept."""
        route = routes.get_route('orders', 'create')
        params = {'project_id': 999, 'files': 'string.yml', 'to_locale': 'de'}

        path, remaining = routes.resolve_path(route, params)

        assert path == '/projects/999/orders'
        assert remaining == {'files': 'string.yml', 'to_locale': 'de'}

    def test_resolve_does_not_mutate_input(self):
        """Test the caller's params are left untouched."""
        route = routes.get_route('projects', 'show')
        params = {'project_id': 999}

        routes.resolve_path(route, params)

        assert params == {'project_id': 999}

    def test_resolve_multiple_placeholders(self):
        """Test substituting every placeholder leaves no tokens behind."""
        route = routes.get_route('import_tasks', 'show')
        path, remaining = routes.resolve_path(route, {'project_id': 1, 'import_id': 2})

        assert path == '/projects/1/import-tasks/2'
        assert ':' not in path
        assert remaining == {}

    @pytest.mark.parametrize("missing", ['project_id', 'order_id'])
    def test_resolve_missing_parameter(self, missing):
        """Test omitting any placeholder names exactly that placeholder."""
        route = routes.get_route('orders', 'show')
        params = {'project_id': 1, 'order_id': 2}
        del params[missing]

        with pytest.raises(MissingParameterError) as exc_info:
            routes.resolve_path(route, params)

        assert exc_info.value.name == missing
        assert missing in str(exc_info.value)

    def test_resolve_missing_reports_first_placeholder(self):
        """Test the leftmost missing placeholder is reported."""
        route = routes.get_route('orders', 'show')

        with pytest.raises(MissingParameterError) as exc_info:
            routes.resolve_path(route, {})

        assert exc_info.value.name == 'project_id'

    def test_resolve_none_value_is_missing(self):
        """Test a None value counts as missing."""
        route = routes.get_route('projects', 'show')

        with pytest.raises(MissingParameterError):
            routes.resolve_path(route, {'project_id': None})

    def test_resolve_zero_value(self):
        """Test falsy but present values are substituted."""
        route = routes.get_route('projects', 'show')
        path, _ = routes.resolve_path(route, {'project_id': 0})

        assert path == '/projects/0'

    def test_resolve_quotes_values(self):
        """Test values cannot add path segments."""
        route = routes.get_route('projects', 'show')
        path, _ = routes.resolve_path(route, {'project_id': '1/../2'})

        assert path == '/projects/1%2F..%2F2'

    def test_resolve_without_placeholders(self):
        """Test routes without placeholders pass params through."""
        route = routes.get_route('locales', 'list')
        path, remaining = routes.resolve_path(route, {'page': 2})

        assert path == '/locales'
        assert remaining == {'page': 2}
