"""Unit tests for ConfigService: layered YAML, overrides and env whitelist."""

import pytest
import yaml

from reelrules.services.config_svc import ENV_OVERRIDES, ConfigService


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run from an empty directory with no REELRULES_* variables set."""
    monkeypatch.chdir(tmp_path)
    for key in [*ENV_OVERRIDES, "REELRULES_CONFIG_PATH"]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(
        ConfigService,
        "_load_yaml",
        _skip_system_file(ConfigService._load_yaml),
    )
    return tmp_path


def _skip_system_file(load):
    """Ignore /etc/reelrules/config.yaml so the host cannot leak into tests."""

    def wrapper(self, path):
        if path.startswith("/etc/"):
            return {}
        return load(self, path)

    return wrapper


def _write_yaml(path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


class TestDefaults:
    @pytest.mark.unit
    def test_defaults(self) -> None:
        service = ConfigService()
        assert service.get("preview.default_limit") == 50
        assert service.get("preview.max_limit") == 500
        assert service.get("rules.max_rule_length") == 65536
        assert service.get("rules.max_conditions") == 200
        assert service.get("registry.extra_fields") == {}
        assert service.get("candidates_path") is None

    @pytest.mark.unit
    def test_missing_key_default(self) -> None:
        assert ConfigService().get("preview.nope", 7) == 7
        assert ConfigService().get("port.deeper", "x") == "x"


class TestLayers:
    @pytest.mark.unit
    def test_repo_config_deep_merged(self, isolated_config) -> None:
        _write_yaml(isolated_config / "config" / "config.yaml", {"preview": {"max_limit": 100}})

        service = ConfigService()

        assert service.get("preview.max_limit") == 100
        assert service.get("preview.default_limit") == 50

    @pytest.mark.unit
    def test_env_path_over_repo_config(self, isolated_config, monkeypatch) -> None:
        _write_yaml(isolated_config / "config" / "config.yaml", {"port": 9000})
        _write_yaml(isolated_config / "other.yaml", {"port": 9001})
        monkeypatch.setenv("REELRULES_CONFIG_PATH", str(isolated_config / "other.yaml"))

        assert ConfigService().get("port") == 9001

    @pytest.mark.unit
    def test_overrides_over_files(self, isolated_config) -> None:
        _write_yaml(isolated_config / "config" / "config.yaml", {"log_level": "DEBUG"})
        assert ConfigService(overrides={"log_level": "ERROR"}).get("log_level") == "ERROR"

    @pytest.mark.unit
    def test_invalid_yaml_ignored(self, isolated_config) -> None:
        path = isolated_config / "config" / "config.yaml"
        path.parent.mkdir()
        path.write_text("port: [unclosed\n", encoding="utf-8")

        assert ConfigService().get("port") == 8372

    @pytest.mark.unit
    def test_non_mapping_yaml_ignored(self, isolated_config) -> None:
        _write_yaml(isolated_config / "config" / "config.yaml", ["a", "b"])
        assert ConfigService().get("port") == 8372


class TestEnvironment:
    @pytest.mark.unit
    def test_whitelisted_env_vars(self, monkeypatch) -> None:
        monkeypatch.setenv("REELRULES_PORT", "9100")
        monkeypatch.setenv("REELRULES_PREVIEW_LIMIT", "25")
        monkeypatch.setenv("REELRULES_CANDIDATES_PATH", "/data/pools.json")

        service = ConfigService(overrides={"port": 1})

        assert service.get("port") == 9100
        assert service.get("preview.default_limit") == 25
        assert service.get("preview.max_limit") == 500
        assert service.get("candidates_path") == "/data/pools.json"

    @pytest.mark.unit
    def test_other_env_vars_ignored(self, monkeypatch) -> None:
        monkeypatch.setenv("REELRULES_MAX_CONDITIONS", "5")
        assert ConfigService().get("rules.max_conditions") == 200


class TestCaching:
    @pytest.mark.unit
    def test_cached_until_reload(self, isolated_config) -> None:
        service = ConfigService()
        assert service.get("port") == 8372

        _write_yaml(isolated_config / "config" / "config.yaml", {"port": 9200})
        assert service.get("port") == 8372

        service.reload()
        assert service.get("port") == 9200
