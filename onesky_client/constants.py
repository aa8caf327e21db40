"""
Constants for the OneSky client library.
Compatible with the OneSky Platform API version 1.
"""

# Platform API endpoint (version 1)
ENDPOINT = "https://platform.api.onesky.io/1"

# Authentication query parameters
PARAM_API_KEY = "api_key"
PARAM_TIMESTAMP = "timestamp"
PARAM_DEV_HASH = "dev_hash"

# HTTP headers
HEADER_CONTENT_TYPE = "Content-Type"
CONTENT_TYPE_JSON = "application/json"

# Supported HTTP methods
HTTP_METHODS = ("GET", "POST", "PUT", "DELETE")

# Default configuration values
DEFAULT_CONFIG = {
    'endpoint': ENDPOINT,
    'timeout': 30,              # HTTP timeout in seconds, None for no timeout
}
