from __future__ import annotations

import pytest

from flydock.adapters.http_resilience import build_retry
from flydock.config import (
    FLY_API_BASE_URL,
    MissingConfigurationError,
    ResilienceConfig,
    get_fly_config,
)


def test_get_fly_config_requires_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FLY_API_TOKEN", raising=False)

    with pytest.raises(MissingConfigurationError, match="FLY_API_TOKEN"):
        get_fly_config()


def test_get_fly_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLY_API_TOKEN", "fo1_abc")
    monkeypatch.delenv("FLY_API_BASE_URL", raising=False)

    config = get_fly_config()

    assert config.authorization == "Bearer fo1_abc"
    assert config.resilience.base_url == FLY_API_BASE_URL
    assert config.resilience.ratelimit is not None


def test_get_fly_config_base_url_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLY_API_TOKEN", "fo1_abc")
    monkeypatch.setenv("FLY_API_BASE_URL", "http://_api.internal:4280/v1")

    assert get_fly_config().resilience.base_url == "http://_api.internal:4280/v1"


def test_explicit_resilience_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FLY_API_TOKEN", "fo1_abc")
    resilience = ResilienceConfig(name="custom", base_url="http://localhost/v1")

    assert get_fly_config(resilience=resilience).resilience is resilience


def test_default_retry_never_replays_post() -> None:
    policy = ResilienceConfig(name="fly").retry

    assert "POST" not in policy.allowed_methods
    assert {"GET", "PUT", "DELETE"} <= policy.allowed_methods
    assert build_retry(policy).total == policy.total
