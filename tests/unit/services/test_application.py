"""Unit tests for the Application composition root."""

import json

import pytest

from reelrules.app import Application
from reelrules.helpers.exceptions import RegistryConfigError
from reelrules.services.config_svc import ConfigService
from reelrules.services.domain.selection_svc import SelectionService


def _app(**overrides) -> Application:
    return Application(ConfigService(overrides=overrides))


class TestApplication:
    @pytest.mark.unit
    def test_start_registers_services(self, tmp_path) -> None:
        pools = tmp_path / "pools.json"
        pools.write_text(json.dumps({"channel": [{"id": "c1", "hd": True}]}), encoding="utf-8")
        app = _app(candidates_path=str(pools), preview={"default_limit": 3})

        app.start()
        try:
            service = app.get_service("selection")
            assert isinstance(service, SelectionService)
            assert service.cfg.default_preview_limit == 3
            assert service.preview("channel", '[{"field": "hd", "operator": "eq", "value": "true"}]').count == 1
            assert app.get_service("config").get("preview.default_limit") == 3
        finally:
            app.stop()
        assert app.is_running() is False

    @pytest.mark.unit
    def test_bad_registry_fails_fast(self) -> None:
        app = _app(registry={"extra_fields": {"channel": [{"name": "x", "type": "boolean", "operators": ["gt"]}]}})
        with pytest.raises(RegistryConfigError):
            app.start()
        assert app.is_running() is False

    @pytest.mark.unit
    def test_unknown_service(self) -> None:
        app = _app()
        with pytest.raises(KeyError):
            app.get_service("selection")

    @pytest.mark.unit
    def test_empty_pools_without_candidates_path(self) -> None:
        app = _app(candidates_path=None)
        app.start()
        try:
            assert app.get_service("selection").preview("media", "[]").count == 0
        finally:
            app.stop()
