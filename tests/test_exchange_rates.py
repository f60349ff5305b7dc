import asyncio

import httpx
import pytest

from storefront.core.config import Settings
from storefront.services.rates.cache_service import ExchangeRateService
from storefront.services.rates.providers import (
    FALLBACK_RATES,
    ExchangeRatesApiProvider,
    StaticRateProvider,
    make_rate_provider,
)

API_URL = "https://rates.test/v1/latest"


def _ok(usd=0.74, eur=0.68):
    return httpx.Response(200, json={"success": True, "rates": {"USD": usd, "EUR": eur}})


class FakeApi:
    """Replays queued responses (or raises queued exceptions) and records requests."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item


def _service(api, clock, ttl=300):
    provider = ExchangeRatesApiProvider(
        API_URL, "secret", transport=httpx.MockTransport(api)
    )
    return ExchangeRateService(provider, ttl_seconds=ttl, clock=clock)


def test_successful_fetch_builds_cad_based_map(clock):
    api = FakeApi(_ok(0.73, 0.67))
    svc = _service(api, clock)
    assert asyncio.run(svc.get_rates()) == {"CAD": 1.0, "USD": 0.73, "EUR": 0.67}
    params = api.requests[0].url.params
    assert params["base"] == "CAD"
    assert params["symbols"] == "USD,EUR"
    assert params["access_key"] == "secret"


def test_cache_hit_within_ttl(clock):
    api = FakeApi(_ok())
    svc = _service(api, clock)
    first = asyncio.run(svc.get_rates())
    clock.advance(seconds=299)
    second = asyncio.run(svc.get_rates())
    assert first == second
    assert len(api.requests) == 1


def test_refetch_after_ttl_expiry(clock):
    api = FakeApi(_ok(0.74, 0.68), _ok(0.75, 0.69))
    svc = _service(api, clock)
    asyncio.run(svc.get_rates())
    clock.advance(minutes=5, seconds=1)
    rates = asyncio.run(svc.get_rates())
    assert rates == {"CAD": 1.0, "USD": 0.75, "EUR": 0.69}
    assert len(api.requests) == 2
    assert svc.snapshot.fetched_at == clock.now


@pytest.mark.parametrize(
    "failure",
    [
        httpx.Response(500),
        httpx.Response(
            200, json={"success": False, "error": {"info": "invalid access key"}}
        ),
        httpx.Response(200, json={"success": True, "rates": {"USD": 0.74}}),
        httpx.Response(200, text="not json"),
        httpx.ConnectError("connection refused"),
        httpx.ReadTimeout("timed out"),
    ],
)
def test_failures_fall_back_without_poisoning_cache(clock, failure):
    api = FakeApi(failure, _ok(0.8, 0.7))
    svc = _service(api, clock)
    assert asyncio.run(svc.get_rates()) == {"CAD": 1.0, "USD": 0.74, "EUR": 0.68}
    assert svc.snapshot is None
    # next call goes back to the network and succeeds
    assert asyncio.run(svc.get_rates()) == {"CAD": 1.0, "USD": 0.8, "EUR": 0.7}
    assert len(api.requests) == 2


def test_unexpected_provider_error_still_falls_back(clock):
    class Broken(StaticRateProvider):
        async def fetch_rates(self):
            raise RuntimeError("bug")

    svc = ExchangeRateService(Broken(), clock=clock)
    assert asyncio.run(svc.get_rates()) == FALLBACK_RATES


def test_returned_rates_do_not_alias_cache(clock):
    svc = _service(FakeApi(_ok()), clock)
    rates = asyncio.run(svc.get_rates())
    rates["USD"] = 99.0
    assert asyncio.run(svc.get_rates())["USD"] == 0.74


def test_price_in_currencies_is_exact(clock):
    svc = ExchangeRateService(StaticRateProvider(), clock=clock)
    assert asyncio.run(svc.get_price_in_currencies(100)) == {
        "CAD": 100,
        "USD": 74,
        "EUR": 68,
    }


def test_price_in_currencies_is_not_rounded(clock):
    svc = ExchangeRateService(StaticRateProvider(), clock=clock)
    prices = asyncio.run(svc.get_price_in_currencies(31.95))
    assert prices["CAD"] == 31.95
    assert prices["USD"] == pytest.approx(23.643)
    assert prices["EUR"] == pytest.approx(21.726)


def test_invalidate_forces_refetch(clock):
    api = FakeApi(_ok())
    svc = _service(api, clock)
    asyncio.run(svc.get_rates())
    svc.invalidate()
    asyncio.run(svc.get_rates())
    assert len(api.requests) == 2


def test_make_rate_provider_selects_by_setting(tmp_path):
    static = make_rate_provider(
        Settings(_env_file=None, exchange_rate_provider="static", upload_dir=tmp_path)
    )
    http = make_rate_provider(Settings(_env_file=None, upload_dir=tmp_path))
    assert isinstance(static, StaticRateProvider)
    assert isinstance(http, ExchangeRatesApiProvider)
    with pytest.raises(ValueError):
        make_rate_provider(
            Settings(_env_file=None, exchange_rate_provider="nope", upload_dir=tmp_path)
        )
