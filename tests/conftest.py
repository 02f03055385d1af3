# conftest.py
from __future__ import annotations

import os

import pytest

from parsefloat.core.log import bind_context, configure_from_env, enable_stdout_logging, get_logger, log_context


def pytest_addoption(parser):
    parser.addoption(
        "--log-json",
        action="store_true",
        default=False,
        help="Emit parsefloat logs in JSON format during tests",
    )


@pytest.fixture(scope="session", autouse=True)
def _configure_parsefloat_logging(request):
    configure_from_env()
    prefer_json = request.config.getoption("--log-json")
    if os.getenv("PARSEFLOAT_LOG_STDOUT", "").lower() not in ("1", "true", "yes", "on"):
        enable_stdout_logging(level="DEBUG", json_output=prefer_json, pretty=not prefer_json)
    bind_context(role="pytest")


@pytest.fixture(autouse=True)
def _test_log_context(request):
    log = get_logger("test")
    with log_context(pytest_nodeid=request.node.nodeid):
        log.debug("pytest.test.start", event="pytest.test.start")
        yield
