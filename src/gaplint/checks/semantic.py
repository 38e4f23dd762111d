"""Semantic checks applied to a metadata record after it passes the schema.

Each `check_*` function returns `None` when the field is acceptable, or the
failure message to report for the directory.
"""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

from email_validator import EmailNotValidError, validate_email

_URL_SCHEMES = ("http", "https", "ftp")
_DOMAIN_LABEL = re.compile(r"^(?!-)[a-z0-9\u00a1-\uffff-]{1,63}(?<!-)$", re.IGNORECASE)
_TLD = re.compile(r"^[a-z\u00a1-\uffff]{2,63}$", re.IGNORECASE)


def is_valid_author(author: str) -> bool:
    # "<addr>" with no name in front is not a display-name form
    if author.lstrip().startswith("<"):
        return False
    try:
        validate_email(author, check_deliverability=False, allow_display_name=True)
    except EmailNotValidError:
        return False
    return True


def _is_valid_host(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        pass
    else:
        return True
    labels = host.rstrip(".").split(".")
    if len(labels) < 2:
        return False
    if not all(_DOMAIN_LABEL.match(label) for label in labels):
        return False
    return bool(_TLD.match(labels[-1]))


def is_valid_url(value: str) -> bool:
    if not value or any(ch.isspace() for ch in value):
        return False
    try:
        parts = urlsplit(value)
        port = parts.port
    except ValueError:
        return False
    if parts.scheme.lower() not in _URL_SCHEMES or not parts.netloc:
        return False
    if port is not None and not 0 < port <= 65535:
        return False
    host = parts.hostname or ""
    return bool(host) and _is_valid_host(host)


def check_authors(metadata: Mapping[str, Any]) -> str | None:
    for author in metadata["authors"]:
        if not is_valid_author(author):
            return f'metadata.yml invalid author "{author}" - must be "Name <email>" or a valid email'
    return None


def check_sponsor(metadata: Mapping[str, Any]) -> str | None:
    sponsor = metadata["sponsor"]
    if not sponsor.startswith("@"):
        return f'metadata.yml sponsor must be a GitHub username starting with @ (got "{sponsor}")'
    return None


def check_discussion(metadata: Mapping[str, Any]) -> str | None:
    discussion = metadata["discussion"]
    if not is_valid_url(discussion):
        return f'metadata.yml discussion must be a valid URL (got "{discussion}")'
    return None


SEMANTIC_CHECKS = (check_authors, check_sponsor, check_discussion)
