"""
Environment configuration management.
"""

import os
from typing import Any, Dict, Optional

from mcp_types.primitives import ScrollConfig


def _env(*names: str, default: Optional[str] = None) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value is not None:
            return value
    return default


def _env_flag(*names: str, default: bool = False) -> bool:
    value = _env(*names)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_current_environment() -> str:
    """
    Get the current environment name.

    Returns:
        Value of ELASTIC_ENVIRONMENT, or 'default'
    """
    return os.getenv("ELASTIC_ENVIRONMENT", "default")


def get_environment_config(environment: Optional[str] = None) -> Dict[str, Any]:
    """
    Get configuration for the environment.

    Environment variables are read on every call so values loaded from a
    .env file after import are picked up.

    Args:
        environment: Ignored (single environment)

    Returns:
        Environment configuration dictionary
    """
    indices = _env("ELASTIC_INDICES", "ELASTICSEARCH_INDICES", default="")
    return {
        "name": get_current_environment(),
        "elasticsearch": {
            "url": _env("ELASTIC_URL", "ELASTICSEARCH_URL", default="http://localhost:9200"),
            "username": _env("ELASTIC_USERNAME", "ELASTICSEARCH_USERNAME"),
            "password": _env("ELASTIC_PASSWORD", "ELASTICSEARCH_PASSWORD"),
            "api_key": _env("ELASTIC_API_KEY", "ELASTICSEARCH_API_KEY"),
            "timeout_ms": int(_env("ELASTIC_TIMEOUT", "ELASTICSEARCH_TIMEOUT", default="30000")),
            "verify_certs": _env_flag("ELASTIC_VERIFY_CERTS", default=True),
            "ca_certs": _env("ELASTIC_CA_CERTS"),
        },
        "defaults": {
            "indices": [index.strip() for index in indices.split(",") if index.strip()],
            "page_size": int(_env("ELASTIC_SCROLL_SIZE", default="100")),
            "scroll_minutes": int(_env("ELASTIC_SCROLL_TTL_MINUTES", default="1")),
            "default_query_type": _env("ELASTIC_DEFAULT_QUERY_TYPE", default="match"),
            "keep_scrolls": _env_flag("ELASTIC_KEEP_SCROLLS"),
            "max_page_size": 10000,
        },
    }


def get_scroll_config(**overrides: Any) -> ScrollConfig:
    """
    Build a ScrollConfig from the environment.

    Args:
        **overrides: ScrollConfig fields to set explicitly; None values are
            ignored so tool arguments can be passed straight through

    Returns:
        ScrollConfig for one scroll search
    """
    config = get_environment_config()
    es = config["elasticsearch"]
    defaults = config["defaults"]

    values = {
        "base_url": es["url"],
        "indices": defaults["indices"],
        "size": defaults["page_size"],
        "scroll_minutes": defaults["scroll_minutes"],
        "default_query_type": defaults["default_query_type"],
        "keep_scrolls": defaults["keep_scrolls"],
        "username": es["username"],
        "password": es["password"],
        "api_key": es["api_key"],
        "timeout_ms": es["timeout_ms"],
        "verify_certs": es["verify_certs"],
        "ca_certs": es["ca_certs"],
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    return ScrollConfig(**values)


def get_auth_params(config: ScrollConfig) -> Dict[str, Any]:
    """
    Get the credentials to send to Elasticsearch.

    An API key takes precedence over basic auth. Both the scroll HTTP
    client and the health-check client build their authentication from
    this.

    Returns:
        ``{"api_key": ...}``, ``{"basic_auth": (username, password)}``,
        or an empty dict when no credentials are configured
    """
    if config.api_key:
        return {"api_key": config.api_key}
    if config.username and config.password:
        return {"basic_auth": (config.username, config.password)}
    return {}


def get_tls_params(config: ScrollConfig) -> Dict[str, Any]:
    """Get certificate verification settings; a CA bundle only applies when verifying."""
    params: Dict[str, Any] = {"verify_certs": config.verify_certs}
    if config.verify_certs and config.ca_certs:
        params["ca_certs"] = config.ca_certs
    return params


def get_auth_headers(config: ScrollConfig) -> Dict[str, str]:
    """
    Get headers for Elasticsearch HTTP requests.

    API key authentication goes in the Authorization header; basic auth is
    handled by the HTTP client.
    """
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
    auth = get_auth_params(config)
    if "api_key" in auth:
        headers["Authorization"] = f"ApiKey {auth['api_key']}"
    return headers
