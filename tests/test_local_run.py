import pytest
from unittest.mock import MagicMock
from src import local_run
from src.coincap_api.client import CoincapClient, CoincapAPIError, AssetNotFoundError
from src.coincap_api.intervals import Interval
from src.coincap_api.models import Asset, PriceSample
from src.utils.chart import GaugeStatus

BITCOIN = Asset(id="bitcoin", rank=1, symbol="BTC", name="bitcoin")
ETHEREUM = Asset(id="ethereum", rank=2, symbol="ETH", name="ethereum")

def series(*prices):
    return [PriceSample(p, 1675817253000 + i) for i, p in enumerate(prices)]

def fake_client(histories):
    client = MagicMock(spec=CoincapClient)

    def fetch(asset_id, interval=None, start_ms=None, end_ms=None):
        result = histories[asset_id]
        if isinstance(result, Exception):
            raise result
        return result

    client.fetch_price_history.side_effect = fetch
    return client

def test_process_asset_prints_gauge(capsys):
    client = fake_client({"bitcoin": series("10000.00", "15000.00")})
    outcome = local_run.process_asset(client, BITCOIN, Interval.ONE_DAY)
    assert outcome.status is GaugeStatus.RENDERED
    assert capsys.readouterr().out == "100.00%|" + "█" * 50 + "|bitcoin\n"
    client.fetch_price_history.assert_called_once_with("bitcoin", Interval.ONE_DAY)

def test_run_dashboard_continues_past_failures(capsys):
    client = fake_client({
        "bitcoin": series("10000.00", "oops"),
        "ethereum": series("0", "100", "50"),
        "solana": AssetNotFoundError("Not found (404)"),
    })
    solana = Asset(id="solana", rank=3, symbol="SOL", name="solana")
    outcomes = local_run.run_dashboard(client, [BITCOIN, ETHEREUM, solana], Interval.ONE_DAY)
    assert len(outcomes) == 1
    assert outcomes[0].text.endswith("|ethereum")
    assert capsys.readouterr().out.startswith("50.00%|")

def test_degenerate_range_is_reported_not_raised(capsys):
    client = fake_client({"bitcoin": series("5", "5")})
    outcomes = local_run.run_dashboard(client, [BITCOIN], Interval.ONE_DAY)
    assert outcomes[0].status is GaugeStatus.DEGENERATE_RANGE
    assert "same" in capsys.readouterr().out

def test_resolve_assets_from_ids():
    args = local_run.parse_arguments(["--asset", "bitcoin", "--asset", "ethereum"])
    config = MagicMock(assets=["dogecoin"])
    assets = local_run.resolve_assets(MagicMock(), args, config)
    assert [a.id for a in assets] == ["bitcoin", "ethereum"]

def test_resolve_assets_falls_back_to_config():
    args = local_run.parse_arguments([])
    config = MagicMock(assets=["dogecoin"])
    assert [a.id for a in local_run.resolve_assets(MagicMock(), args, config)] == ["dogecoin"]

def test_resolve_assets_top_n():
    client = MagicMock()
    client.fetch_asset_list.return_value = [ETHEREUM, BITCOIN]
    args = local_run.parse_arguments(["--top", "1"])
    assets = local_run.resolve_assets(client, args, MagicMock())
    assert assets == [BITCOIN]
    client.fetch_asset_list.assert_called_once_with(limit=1)

@pytest.fixture
def patched_env(monkeypatch):
    for name in ['COINCAP_INTERVAL', 'COINCAP_START_MS', 'COINCAP_END_MS', 'COINCAP_ASSETS', 'COINCAP_TIMEOUT']:
        monkeypatch.setenv(name, "")
    return monkeypatch

def test_main_runs_configured_assets(patched_env, capsys):
    client = fake_client({"bitcoin": series("0", "100", "50")})
    patched_env.setattr(local_run, "CoincapClient", lambda config: client)
    assert local_run.main(["--interval", "h1"]) == 0
    assert "50.00%|" in capsys.readouterr().out
    client.fetch_price_history.assert_called_once_with("bitcoin", Interval.ONE_HOUR)

def test_main_rejects_bad_window(patched_env):
    assert local_run.main(["--start", "10", "--end", "5"]) == 2

def test_main_fails_when_asset_list_unavailable(patched_env):
    client = MagicMock()
    client.fetch_asset_list.side_effect = CoincapAPIError("API request failed with status 503")
    patched_env.setattr(local_run, "CoincapClient", lambda config: client)
    assert local_run.main(["--top", "5"]) == 1

def test_main_rejects_non_finite_timeout(patched_env):
    patched_env.setenv('COINCAP_TIMEOUT', 'nan')
    assert local_run.main([]) == 2

@pytest.mark.parametrize("value", ["0", "-1", "two"])
def test_top_must_be_positive(value):
    with pytest.raises(SystemExit):
        local_run.parse_arguments(["--top", value])

def test_no_data_series_is_logged(caplog):
    client = fake_client({"bitcoin": []})
    with caplog.at_level("WARNING"):
        outcome = local_run.process_asset(client, BITCOIN, Interval.ONE_DAY)
    assert outcome.status is GaugeStatus.OUT_OF_BOUNDS
    assert "no usable prices" in caplog.text
