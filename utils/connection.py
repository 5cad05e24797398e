"""
Elasticsearch connection management.
"""

import logging
import ssl
from typing import Optional

import httpx
from elasticsearch import ApiError, Elasticsearch, TransportError

from config.environments import (
    get_auth_headers,
    get_auth_params,
    get_scroll_config,
    get_tls_params,
)
from mcp_types.primitives import ScrollConfig


logger = logging.getLogger(__name__)


def get_http_client(config: ScrollConfig) -> httpx.AsyncClient:
    """
    Create the HTTP client used for scroll searches.

    Args:
        config: Scroll configuration with endpoint and credentials

    Returns:
        AsyncClient bound to the configured base URL
    """
    credentials = get_auth_params(config)
    auth = None
    if "basic_auth" in credentials:
        auth = httpx.BasicAuth(*credentials["basic_auth"])

    tls = get_tls_params(config)
    verify = tls["verify_certs"]
    if "ca_certs" in tls:
        verify = ssl.create_default_context(cafile=tls["ca_certs"])

    return httpx.AsyncClient(
        base_url=config.base_url,
        headers=get_auth_headers(config),
        auth=auth,
        timeout=config.timeout_ms / 1000.0,
        verify=verify,
    )


def get_elasticsearch_client(environment: Optional[str] = None) -> Elasticsearch:
    """
    Create an Elasticsearch client for the specified environment.

    Args:
        environment: Environment name (uses current if not specified)

    Returns:
        Configured Elasticsearch client
    """
    config = get_scroll_config()

    # Build connection parameters
    params = {
        "hosts": [config.base_url],
        "request_timeout": config.timeout_ms / 1000.0,
    }
    params.update(get_tls_params(config))
    params.update(get_auth_params(config))

    return Elasticsearch(**params)


def test_connection(environment: Optional[str] = None) -> bool:
    """
    Test Elasticsearch connection using a low-privilege operation.

    Args:
        environment: Environment name (uses current if not specified)

    Returns:
        True if connection successful
    """
    es = get_elasticsearch_client(environment)
    try:
        # ping() needs cluster:monitor, a size-0 search works with read access
        response = es.search(
            index="*",
            size=0,
            query={"match_all": {}},
            timeout="5s",
        )
        return "hits" in response
    except (ApiError, TransportError) as e:
        logger.warning("Elasticsearch connection check failed: %s", e)
        return False
    finally:
        es.close()
