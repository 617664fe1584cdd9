"""Tests for runtime configuration."""

import pytest
from pydantic import ValidationError

from lambda_runtime.config import (
    DEFAULT_HANDLER_EXTENSIONS,
    RuntimeSettings,
    get_settings,
    validate_startup_config,
)
from lambda_runtime.exceptions.startup_errors import ConfigurationError


@pytest.fixture()
def runtime_api(monkeypatch):
    monkeypatch.setenv("AWS_LAMBDA_RUNTIME_API", "127.0.0.1:9001")


class TestDefaultHandlerExtensions:
    def test_source_first_then_bytecode(self):
        assert DEFAULT_HANDLER_EXTENSIONS[0] == ".py"
        assert DEFAULT_HANDLER_EXTENSIONS[1] == ".pyc"

    def test_includes_native_extension_suffixes(self):
        assert any(suffix.endswith((".so", ".pyd")) for suffix in DEFAULT_HANDLER_EXTENSIONS)


@pytest.mark.usefixtures("runtime_api")
class TestSettingsDefaults:
    def test_runtime_api(self):
        assert RuntimeSettings().runtime_api == "127.0.0.1:9001"

    def test_default_handler(self):
        assert RuntimeSettings().handler == "mod.handler"

    def test_default_task_root(self):
        assert RuntimeSettings().task_root == "/var/task"

    def test_default_extensions(self):
        assert RuntimeSettings().handler_extensions == list(DEFAULT_HANDLER_EXTENSIONS)

    def test_default_metadata_empty(self):
        settings = RuntimeSettings()
        assert settings.function_name == ""
        assert settings.function_version == ""
        assert settings.memory_size == ""


@pytest.mark.usefixtures("runtime_api")
class TestSettingsFromEnvironment:
    def test_handler(self, monkeypatch):
        monkeypatch.setenv("_HANDLER", "app.main")
        assert RuntimeSettings().handler == "app.main"

    def test_blank_handler_uses_default(self, monkeypatch):
        monkeypatch.setenv("_HANDLER", "")
        assert RuntimeSettings().handler == "mod.handler"

    def test_task_root(self, monkeypatch):
        monkeypatch.setenv("LAMBDA_TASK_ROOT", "/opt/code")
        assert RuntimeSettings().task_root == "/opt/code"

    def test_function_metadata(self, monkeypatch):
        monkeypatch.setenv("AWS_LAMBDA_FUNCTION_NAME", "echo")
        monkeypatch.setenv("AWS_LAMBDA_FUNCTION_VERSION", "$LATEST")
        monkeypatch.setenv("AWS_LAMBDA_FUNCTION_MEMORY_SIZE", "256")
        monkeypatch.setenv("AWS_LAMBDA_LOG_GROUP_NAME", "/aws/lambda/echo")
        monkeypatch.setenv("AWS_LAMBDA_LOG_STREAM_NAME", "stream-1")
        settings = RuntimeSettings()
        assert settings.function_name == "echo"
        assert settings.function_version == "$LATEST"
        assert settings.memory_size == "256"
        assert settings.log_group_name == "/aws/lambda/echo"
        assert settings.log_stream_name == "stream-1"

    def test_handler_extensions_json(self, monkeypatch):
        monkeypatch.setenv("HANDLER_EXTENSIONS", '[".pyc", ".py"]')
        assert RuntimeSettings().handler_extensions == [".pyc", ".py"]

    def test_extension_without_dot_rejected(self, monkeypatch):
        monkeypatch.setenv("HANDLER_EXTENSIONS", '["py"]')
        with pytest.raises(ValidationError):
            RuntimeSettings()

    def test_empty_extensions_rejected(self, monkeypatch):
        monkeypatch.setenv("HANDLER_EXTENSIONS", "[]")
        with pytest.raises(ValidationError):
            RuntimeSettings()


@pytest.mark.usefixtures("runtime_api")
class TestUnrelatedVariablesIgnored:
    @pytest.mark.parametrize(
        ("variable", "field", "expected"),
        [
            ("HANDLER", "handler", "mod.handler"),
            ("TASK_ROOT", "task_root", "/var/task"),
            ("MEMORY_SIZE", "memory_size", ""),
            ("FUNCTION_NAME", "function_name", ""),
        ],
    )
    def test_bare_field_name_not_read(self, monkeypatch, variable, field, expected):
        monkeypatch.setenv(variable, "unrelated")
        assert getattr(RuntimeSettings(), field) == expected

    def test_field_names_accepted_as_arguments(self):
        settings = RuntimeSettings(handler="app.run", memory_size="512")
        assert settings.handler == "app.run"
        assert settings.memory_size == "512"


class TestMissingRuntimeApi:
    def test_required(self):
        with pytest.raises(ValidationError):
            RuntimeSettings()


class TestGetSettings:
    @pytest.mark.usefixtures("runtime_api")
    def test_cached(self):
        assert get_settings() is get_settings()


class TestValidateStartupConfig:
    @pytest.mark.usefixtures("runtime_api")
    def test_returns_settings(self):
        assert validate_startup_config().runtime_api == "127.0.0.1:9001"

    def test_invalid_config_raises_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_startup_config()

        assert exc_info.value.fatal is True
        assert exc_info.value.context["fields"]
