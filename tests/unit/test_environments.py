"""
Unit tests for environment configuration.
"""

from config.environments import (
    get_auth_headers,
    get_auth_params,
    get_current_environment,
    get_environment_config,
    get_scroll_config,
    get_tls_params,
)
from mcp_types.primitives import ScrollConfig


class TestScrollConfig:
    """Test cases for building ScrollConfig from the environment."""

    def test_defaults(self, clean_environment):
        """Test default values when nothing is configured."""
        config = get_scroll_config()

        assert config.base_url == "http://es.test:9200"
        assert config.indices == []
        assert config.size == 100
        assert config.scroll_minutes == 1
        assert config.default_query_type == "match"
        assert config.keep_scrolls is False
        assert config.timeout_ms == 30000
        assert config.verify_certs is True

    def test_reads_environment(self, clean_environment):
        """Test every setting is read from its environment variable."""
        clean_environment.setenv("ELASTIC_INDICES", "logs-*, metrics-*,")
        clean_environment.setenv("ELASTIC_SCROLL_SIZE", "500")
        clean_environment.setenv("ELASTIC_SCROLL_TTL_MINUTES", "3")
        clean_environment.setenv("ELASTIC_DEFAULT_QUERY_TYPE", "term")
        clean_environment.setenv("ELASTIC_KEEP_SCROLLS", "true")
        clean_environment.setenv("ELASTIC_API_KEY", "secret")

        config = get_scroll_config()

        assert config.indices == ["logs-*", "metrics-*"]
        assert config.size == 500
        assert config.scroll_minutes == 3
        assert config.default_query_type == "term"
        assert config.keep_scrolls is True
        assert config.api_key == "secret"

    def test_fallback_variable_names(self, clean_environment):
        """Test ELASTICSEARCH_* names are used when ELASTIC_* are unset."""
        clean_environment.delenv("ELASTIC_URL")
        clean_environment.setenv("ELASTICSEARCH_URL", "https://search.internal:9243")

        assert get_scroll_config().base_url == "https://search.internal:9243"

    def test_overrides(self, clean_environment):
        """Test explicit overrides win and None overrides are ignored."""
        clean_environment.setenv("ELASTIC_KEEP_SCROLLS", "yes")

        config = get_scroll_config(size=5, indices=["_all"], keep_scrolls=False, scroll_minutes=None)

        assert config.size == 5
        assert config.indices == ["_all"]
        assert config.keep_scrolls is False
        assert config.scroll_minutes == 1

    def test_environment_name(self, clean_environment):
        """Test the environment name setting."""
        assert get_current_environment() == "default"
        clean_environment.setenv("ELASTIC_ENVIRONMENT", "staging")
        assert get_environment_config()["name"] == "staging"


class TestAuthParams:
    """Test cases for the shared credential and TLS settings."""

    def test_api_key_takes_precedence(self):
        """Test an API key wins over username and password."""
        params = get_auth_params(ScrollConfig(api_key="abc", username="elastic", password="changeme"))
        assert params == {"api_key": "abc"}

    def test_basic_auth(self):
        """Test username and password without an API key."""
        params = get_auth_params(ScrollConfig(username="elastic", password="changeme"))
        assert params == {"basic_auth": ("elastic", "changeme")}

    def test_incomplete_credentials(self):
        """Test a username without a password sends no credentials."""
        assert get_auth_params(ScrollConfig(username="elastic")) == {}

    def test_tls_params(self):
        """Test the CA bundle is only passed when certificates are verified."""
        assert get_tls_params(ScrollConfig(ca_certs="/etc/ssl/es.pem")) == {
            "verify_certs": True,
            "ca_certs": "/etc/ssl/es.pem",
        }
        assert get_tls_params(ScrollConfig(verify_certs=False, ca_certs="/etc/ssl/es.pem")) == {
            "verify_certs": False,
        }


class TestAuthHeaders:
    """Test cases for request headers."""

    def test_api_key(self):
        """Test the API key goes into the Authorization header."""
        headers = get_auth_headers(ScrollConfig(api_key="abc123"))
        assert headers["Authorization"] == "ApiKey abc123"
        assert headers["Content-Type"] == "application/json"

    def test_without_api_key(self):
        """Test no Authorization header is set for basic auth."""
        headers = get_auth_headers(ScrollConfig(username="elastic", password="changeme"))
        assert "Authorization" not in headers
