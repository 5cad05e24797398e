"""
Configuration management for MCP Elasticsearch scroll server.
"""

from .environments import (
    get_auth_headers,
    get_auth_params,
    get_current_environment,
    get_environment_config,
    get_scroll_config,
    get_tls_params,
)

__all__ = [
    "get_auth_headers",
    "get_auth_params",
    "get_current_environment",
    "get_environment_config",
    "get_scroll_config",
    "get_tls_params",
]
