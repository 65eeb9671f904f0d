"""Pytest configuration for vidlink tests."""

import pytest

from vidlink.config.loader import clear_config_cache

# Comfortably above the default minimum body length
FILLER = "<!-- " + "lorem ipsum dolor sit amet " * 40 + "-->"


def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests against live relays (requires network)",
    )


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--run-integration"):
        skip = pytest.mark.skip(reason="needs --run-integration flag")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keep tests independent of the developer's env and cached config."""
    for key in (
        "VIDLINK_ROOT",
        "VIDLINK_CHANNELS",
        "VIDLINK_USER_AGENT",
        "VIDLINK_ATTEMPT_TIMEOUT",
        "VIDLINK_MIN_BODY_LENGTH",
    ):
        monkeypatch.delenv(key, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def page():
    """Build an HTML page long enough to pass validation."""

    def build(*fragments: str) -> str:
        inner = "\n".join(fragments)
        return f"<html><head></head><body>{inner}\n{FILLER}</body></html>"

    return build
