"""Tests for front-end configuration loading."""

import pytest

from blogfront.config import FrontendConfig, load_config


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.yaml", environ={})
        assert config == FrontendConfig()

    def test_reads_yaml(self, tmp_path):
        path = tmp_path / "blogfront.yaml"
        path.write_text("api_url: https://api.example.com\nusers_page_size: 25\nlog_level: debug\n")
        config = load_config(path, environ={})
        assert config.api_url == "https://api.example.com"
        assert config.users_page_size == 25
        assert config.log_level == "DEBUG"
        assert config.posts_page_size == 5

    def test_environment_overrides_file(self, tmp_path):
        path = tmp_path / "blogfront.yaml"
        path.write_text("api_url: https://api.example.com\nrequest_timeout: 10\n")
        config = load_config(
            path,
            environ={"BLOGFRONT_API_URL": "http://localhost:4000", "BLOGFRONT_REQUEST_TIMEOUT": "2.5"},
        )
        assert config.api_url == "http://localhost:4000"
        assert config.request_timeout == 2.5

    def test_config_path_from_environment(self, tmp_path):
        path = tmp_path / "other.yaml"
        path.write_text("published_page_size: 8\n")
        config = load_config(environ={"BLOGFRONT_CONFIG": str(path)})
        assert config.published_page_size == 8

    def test_empty_file(self, tmp_path):
        path = tmp_path / "blogfront.yaml"
        path.write_text("")
        assert load_config(path, environ={}) == FrontendConfig()

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "blogfront.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path, environ={})


class TestFrontendConfig:
    """Tests for FrontendConfig validation."""

    def test_rejects_non_http_url(self):
        with pytest.raises(ValueError, match="api_url"):
            FrontendConfig.from_dict({"api_url": "ftp://example.com"})

    def test_rejects_zero_page_size(self):
        with pytest.raises(ValueError, match="posts_page_size"):
            FrontendConfig.from_dict({"posts_page_size": 0})

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError, match="request_timeout"):
            FrontendConfig.from_dict({"request_timeout": 0})

    def test_to_dict_round_trip(self):
        config = FrontendConfig(api_url="https://x.test", users_page_size=20)
        assert FrontendConfig.from_dict(config.to_dict()) == config
