import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_cors_origins_accept_comma_separated_string():
    settings = Settings(BACKEND_CORS_ORIGINS="http://a.test, http://b.test")
    assert settings.BACKEND_CORS_ORIGINS == ["http://a.test", "http://b.test"]


def test_negative_retry_budget_is_rejected():
    with pytest.raises(ValidationError):
        Settings(CONFLICT_MAX_RETRIES=-1)


def test_order_duration_defaults():
    settings = Settings()
    assert settings.ORDER_DEFAULT_DURATION_HOURS == 24
    assert settings.ORDER_MAX_DURATION_HOURS == 168
