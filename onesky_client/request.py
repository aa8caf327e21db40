"""
Request descriptor built for every dispatched API call.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class RequestDescriptor:
    """
    Fully resolved HTTP request for one API call.

    ``url`` already carries the authentication query string (and, for GET,
    the remaining parameters). ``body`` is the JSON-encoded payload for
    POST/PUT/DELETE, or None for GET and multipart requests; multipart
    requests send ``params`` as form fields alongside ``file_field``.
    """

    method: str
    url: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    body: Optional[str] = None
    is_multipart: bool = False
    is_file_download: bool = False
    file_field: Optional[str] = None
