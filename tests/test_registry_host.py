"""Unit tests for ecr_auth/registry_host.py"""

import pytest

from ecr_auth.error_utils import EndpointParseError, MalformedRegistryHostError
from ecr_auth.registry_host import is_ecr_registry, parse_account_id, registry_name_from_endpoint


class TestIsEcrRegistry:
    """Tests for is_ecr_registry"""

    @pytest.mark.parametrize(
        "host",
        [
            "12345.dkr.ecr.us-east-1.amazonaws.com",
            "12345.dkr.example.amazonaws.com",
        ],
    )
    def test_ecr_hosts(self, host):
        assert is_ecr_registry(host) is True

    @pytest.mark.parametrize(
        "host",
        [
            "docker.io",
            "index.docker.io",
            "registry.example.com:5000",
            "amazonaws.com.evil.example",
            "12345.dkr.ecr.us-east-1.amazonaws.com:443",
        ],
    )
    def test_other_hosts(self, host):
        assert is_ecr_registry(host) is False


class TestParseAccountId:
    """Tests for parse_account_id"""

    def test_account_id_is_first_label(self):
        assert parse_account_id("12345.dkr.example.amazonaws.com") == "12345"

    def test_host_without_dot(self):
        with pytest.raises(MalformedRegistryHostError) as exc_info:
            parse_account_id("localhost")
        assert exc_info.value.host == "localhost"


class TestRegistryNameFromEndpoint:
    """Tests for registry_name_from_endpoint"""

    def test_no_port(self):
        assert (
            registry_name_from_endpoint("https://12345.dkr.example.amazonaws.com/")
            == "12345.dkr.example.amazonaws.com"
        )

    def test_default_port(self):
        assert registry_name_from_endpoint("https://registry.example.com:443/") == "registry.example.com"

    def test_custom_port(self):
        assert registry_name_from_endpoint("https://registry.example.com:5000") == "registry.example.com:5000"

    @pytest.mark.parametrize("endpoint", [None, "", "not a url", "https://host:99999999/", "https://:443/"])
    def test_unparseable(self, endpoint):
        with pytest.raises(EndpointParseError):
            registry_name_from_endpoint(endpoint)
