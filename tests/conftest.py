"""Shared test fixtures."""

import sys

import pytest

from lambda_runtime.config import get_settings
from lambda_runtime.logging.context import unbind_invocation


@pytest.fixture(autouse=True)
def _clear_environment(monkeypatch):
    """Clear environment variables that affect settings."""
    env_vars_to_clear = [
        "AWS_LAMBDA_RUNTIME_API",
        "_HANDLER",
        "LAMBDA_TASK_ROOT",
        "HANDLER_EXTENSIONS",
        "AWS_LAMBDA_FUNCTION_NAME",
        "AWS_LAMBDA_FUNCTION_VERSION",
        "AWS_LAMBDA_FUNCTION_MEMORY_SIZE",
        "AWS_LAMBDA_LOG_GROUP_NAME",
        "AWS_LAMBDA_LOG_STREAM_NAME",
        "AWS_LAMBDA_LOG_LEVEL",
        "AWS_LAMBDA_LOG_FORMAT",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "LOG_INCLUDE_LOCATION",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _clear_logging_context():
    """Start every test without a request id bound to the logs."""
    unbind_invocation()
    yield
    unbind_invocation()


@pytest.fixture()
def task_root(tmp_path, monkeypatch):
    """Empty task root; handler modules loaded from it are unloaded afterwards."""
    monkeypatch.setattr(sys, "path", list(sys.path))
    yield tmp_path
    for name, module in list(sys.modules.items()):
        module_file = getattr(module, "__file__", None) or ""
        if module_file.startswith(str(tmp_path)):
            del sys.modules[name]
