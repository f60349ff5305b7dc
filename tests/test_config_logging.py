import json
import logging

import pytest

from storefront.core.config import Settings
from storefront.core.logging import JsonFormatter, RequestIdFilter, request_id_ctx


def test_defaults(tmp_path):
    s = Settings(_env_file=None, upload_dir=tmp_path / "up")
    s.init_post_load()
    assert s.rates_cache_ttl_seconds == 300
    assert s.exchange_rate_provider == "exchangeratesapi"
    assert s.api_prefix == "/api"
    assert s.max_upload_bytes == 5 * 1024 * 1024
    assert s.pricing_strict is False
    assert (tmp_path / "up").is_dir()


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("EXCHANGE_RATE_PROVIDER", "static")
    monkeypatch.setenv("RATES_CACHE_TTL_SECONDS", "60")
    monkeypatch.setenv("PRICING_STRICT", "true")
    s = Settings(_env_file=None, upload_dir=tmp_path)
    assert s.exchange_rate_provider == "static"
    assert s.rates_cache_ttl_seconds == 60
    assert s.pricing_strict is True


@pytest.mark.parametrize(
    "kwargs", [{"exchange_rate_provider": "bogus"}, {"rates_cache_ttl_seconds": 0}]
)
def test_init_post_load_rejects_bad_values(tmp_path, kwargs):
    s = Settings(_env_file=None, upload_dir=tmp_path, **kwargs)
    with pytest.raises(ValueError):
        s.init_post_load()


def test_json_formatter_includes_request_id():
    record = logging.LogRecord(
        "storefront.test", logging.INFO, __file__, 1, "hello %s", ("world",), None
    )
    token = request_id_ctx.set("rid-1")
    try:
        RequestIdFilter().filter(record)
    finally:
        request_id_ctx.reset(token)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "storefront.test"
    assert payload["request_id"] == "rid-1"
