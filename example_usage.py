#!/usr/bin/env python3
"""
Basic usage examples for the OneSky Python client library.

This script demonstrates how to use the client to make signed requests
to the OneSky Platform API. Replace the credentials and ids below with
values from your OneSky account.
"""

import json
import logging
import sys

from onesky_client import OneSkyClient, OneSkyClientError


def main():
    """Run basic usage examples."""

    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.INFO)

    # Account configuration
    api_key = "your-api-key"
    secret = "your-api-secret"
    project_group_id = 999
    project_id = 1099

    print("=== OneSky Python Client Basic Usage Examples ===\n")

    # Create client
    print("1. Creating OneSky client...")
    client = OneSkyClient().set_api_key(api_key).set_secret(secret)
    print(f"   Endpoint: {client.endpoint}")
    print(f"   API key: {api_key[:8]}...\n")

    # Example 1: Route table introspection
    print("2. Available resources and actions...")
    for resource in client.get_resources():
        print(f"   {resource}: {', '.join(client.get_actions_by_resource(resource))}")
    print()

    # Example 2: Inspect a signed request without sending it
    print("3. Preparing a signed request...")
    request = client.prepare_request("projects", "show", project_id=project_id)
    print(f"   {request.method} {request.path}")
    print(f"   Body: {request.body}\n")

    try:
        # Example 3: List project types
        print("4. Listing project types...")
        body = client.project_types("list")
        data = json.loads(body)
        print(f"   Status: {data.get('meta', {}).get('status')}\n")

        # Example 4: Create a project in a group
        print("5. Creating project...")
        body = client.projects("create", project_group_id=project_group_id,
                               project_type="website", name="Example project")
        print(f"   Response: {body}\n")

        # Example 5: Upload a string file
        print("6. Uploading string file...")
        body = client.files("upload", project_id=project_id, file="string.yml",
                            file_format="YAML", locale="en")
        print(f"   Response: {body}\n")

        # Example 6: Download a translation file
        print("7. Exporting French translations...")
        content = client.translations("export", project_id=project_id, locale="fr",
                                      source_file_name="string.yml")
        print(f"   Downloaded {len(content)} bytes\n")

        # Example 7: Place a translation order
        print("8. Creating order...")
        body = client.orders("create", project_id=project_id, files="string.yml", to_locale="de")
        print(f"   Response: {body}\n")

    except (OneSkyClientError, OSError) as e:
        print(f"   ✗ Request error: {e}")
        return 1

    print("=== Examples completed ===")
    return 0


if __name__ == "__main__":
    sys.exit(main())
