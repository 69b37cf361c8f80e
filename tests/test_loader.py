"""End-to-end tests for loading a configuration document."""

from __future__ import annotations

import io
import json

import pytest

from wmr_server.config import EnvSettings, init_config, load_config_file, verify_token
from wmr_server.errors import ConfigParseError, InvalidPortError, MissingTokenError
from wmr_server.modules import ModuleRegistry

FAST_COST = 4


@pytest.fixture
def single_registry() -> ModuleRegistry:
    return ModuleRegistry({"a": object()})


def _load(document, registry, env=None):
    stream = io.StringIO(document if isinstance(document, str) else json.dumps(document))
    return init_config(stream, env=env, registry=registry, token_cost=FAST_COST)


class TestInitConfig:
    def test_minimal_document(self, single_registry):
        config = _load({"auth_token": "secret", "modules": ["a"]}, single_registry)

        assert config.token != "secret"
        assert verify_token("secret", config.token)
        assert config.modules == ["a"]
        assert config.webserver.port == "9898"
        assert config.webserver.debug is False

    def test_reads_process_environment_by_default(self, clean_env, single_registry):
        clean_env.setenv("WMR_TOKEN", "env-secret")
        clean_env.setenv("WMR_MODULES", "a,zzz")
        clean_env.setenv("WMR_WEBSERVER_PORT", "8443")
        clean_env.setenv("WMR_WEBSERVER_DEBUG", "T")

        config = _load("{}", single_registry)

        assert verify_token("env-secret", config.token)
        assert config.modules == ["a"]
        assert config.webserver.port == "8443"
        assert config.webserver.debug is True

    def test_full_document(self, single_registry):
        document = {
            "webserver": {"debug": True, "port": "10000"},
            "auth_token": "secret",
            "modules": ["a", "b"],
            "unknown": 1,
        }
        config = _load(document, single_registry, env=EnvSettings())

        assert config.webserver.port == "10000"
        assert config.webserver.debug is True
        assert config.modules == ["a"]

    def test_binary_stream(self, single_registry):
        stream = io.BytesIO(b'{"auth_token": "secret", "modules": ["a"]}')
        config = init_config(stream, registry=single_registry, token_cost=FAST_COST)
        assert config.modules == ["a"]

    def test_validation_errors_propagate(self, single_registry):
        with pytest.raises(MissingTokenError):
            _load({"modules": ["a"]}, single_registry)
        with pytest.raises(InvalidPortError):
            _load({"webserver": {"port": "abc"}, "auth_token": "s", "modules": ["a"]}, single_registry)


class TestNullFields:
    def test_null_token_falls_back_to_env(self, single_registry):
        config = _load(
            '{"auth_token": null, "modules": ["a"]}',
            single_registry,
            env=EnvSettings(token="envtok"),
        )
        assert verify_token("envtok", config.token)

    def test_null_token_without_env_fails(self, single_registry):
        with pytest.raises(MissingTokenError):
            _load('{"auth_token": null, "modules": ["a"]}', single_registry)

    def test_null_webserver_uses_defaults(self, single_registry):
        config = _load(
            '{"webserver": null, "auth_token": "s", "modules": ["a"]}', single_registry
        )
        assert config.webserver.port == "9898"
        assert config.webserver.debug is False

    def test_null_port_falls_back_to_env(self, single_registry):
        config = _load(
            '{"webserver": {"port": null}, "auth_token": "s", "modules": ["a"]}',
            single_registry,
            env=EnvSettings(webserver_port="8080"),
        )
        assert config.webserver.port == "8080"

    def test_null_port_defaults(self, single_registry):
        config = _load(
            '{"webserver": {"port": null}, "auth_token": "s", "modules": ["a"]}',
            single_registry,
        )
        assert config.webserver.port == "9898"

    def test_null_debug_is_false(self, single_registry):
        config = _load(
            '{"webserver": {"debug": null}, "auth_token": "s", "modules": ["a"]}',
            single_registry,
        )
        assert config.webserver.debug is False

    def test_null_modules_falls_back_to_env(self, single_registry):
        config = _load(
            '{"auth_token": "s", "modules": null}',
            single_registry,
            env=EnvSettings(modules="a,b"),
        )
        assert config.modules == ["a"]


class TestParseErrors:
    @pytest.mark.parametrize(
        "document",
        [
            "",
            "{not json",
            "[]",
            "null",
            '{"webserver": {"port": 9898}}',
            '{"webserver": {"debug": "true"}}',
            '{"auth_token": 42}',
            '{"modules": "a,b"}',
        ],
    )
    def test_invalid_document(self, single_registry, document):
        with pytest.raises(ConfigParseError) as excinfo:
            _load(document, single_registry)
        assert excinfo.value.code == "PARSE_ERROR"
        assert excinfo.value.details["configuration"] == "document"


class TestLoadConfigFile:
    def test_reads_file(self, tmp_path, single_registry):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"auth_token": "secret", "modules": ["a"]}), encoding="utf-8")

        config = load_config_file(path, registry=single_registry, token_cost=FAST_COST)

        assert config.modules == ["a"]

    def test_missing_file(self, tmp_path, single_registry):
        with pytest.raises(ConfigParseError) as excinfo:
            load_config_file(tmp_path / "missing.json", registry=single_registry)
        assert excinfo.value.details["path"].endswith("missing.json")
