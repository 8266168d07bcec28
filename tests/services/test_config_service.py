"""Tests for ConfigService."""

import json
from unittest.mock import patch

import pytest

from todovault.models import AppConfig
from todovault.services.config_service import ConfigService, get_config_service


@pytest.fixture()
def config_service(tmp_path):
    return ConfigService(config_dir=tmp_path / "config")


class TestLoad:
    def test_first_run_writes_defaults(self, config_service):
        config = config_service.load_config()

        assert config == AppConfig()
        assert config_service.config_path.exists()
        saved = json.loads(config_service.config_path.read_text())
        assert saved["admin"]["password"] == "admin123"
        assert saved["storage"]["strict_ownership"] is False
        assert saved["security"]["password_hasher"] == "rolling"

    def test_saved_file_is_private(self, config_service):
        config_service.load_config()

        assert config_service.config_path.stat().st_mode & 0o777 == 0o600
        assert not config_service.config_path.with_suffix(".json.tmp").exists()

    def test_reads_existing_file(self, tmp_path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(
            json.dumps({"storage": {"db_path": "/tmp/vault.db", "strict_ownership": True}})
        )

        config = ConfigService(config_dir).config
        assert config.storage.db_path == "/tmp/vault.db"
        assert config.storage.strict_ownership is True
        assert config.admin.password == "admin123"

    def test_blank_db_path_means_default(self, tmp_path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(json.dumps({"storage": {"db_path": "  "}}))
        assert ConfigService(config_dir).config.storage.db_path is None

    def test_invalid_file(self, tmp_path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "config.json").write_text("{broken")

        with pytest.raises(RuntimeError, match="Failed to load config"):
            ConfigService(config_dir).load_config()

    def test_unknown_hasher_rejected(self, tmp_path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(
            json.dumps({"security": {"password_hasher": "md5"}})
        )
        with pytest.raises(RuntimeError):
            ConfigService(config_dir).load_config()


class TestGetSet:
    def test_get_nested(self, config_service):
        assert config_service.get("admin.password") == "admin123"
        assert config_service.get("output.color") is True

    @pytest.mark.parametrize("key", ["nope", "admin.nope", "admin.password.length"])
    def test_get_unknown(self, config_service, key):
        with pytest.raises(KeyError):
            config_service.get(key)

    def test_set_persists(self, config_service):
        config_service.set("admin.password", "s3cret")

        reloaded = ConfigService(config_service.config_dir)
        assert reloaded.get("admin.password") == "s3cret"

    def test_set_coerces_booleans(self, config_service):
        config_service.set("storage.strict_ownership", "true")
        assert config_service.get("storage.strict_ownership") is True

    def test_set_invalid_value(self, config_service):
        with pytest.raises(ValueError, match="Invalid value"):
            config_service.set("security.password_hasher", "md5")
        assert config_service.get("security.password_hasher") == "rolling"

    def test_set_unknown_key(self, config_service):
        with pytest.raises(KeyError):
            config_service.set("storage.nope", "1")

    def test_reset(self, config_service):
        config_service.set("admin.password", "changed")
        config_service.reset_config()
        assert config_service.get("admin.password") == "admin123"
        assert ConfigService(config_service.config_dir).get("admin.password") == "admin123"


def test_cached_service_uses_user_config_dir(tmp_path):
    get_config_service.cache_clear()
    try:
        with patch(
            "todovault.services.config_service.user_config_dir",
            return_value=str(tmp_path / "cfg"),
        ):
            first = get_config_service()
            assert first is get_config_service()
            assert first.config_path == tmp_path / "cfg" / "config.json"
            assert first.config_path.exists()
    finally:
        get_config_service.cache_clear()
