"""Tests for the command line entry point."""

import json
from typing import Any, Dict

import pytest

from electricitymap import client as client_module
from electricitymap.__main__ import OPERATIONS, main
from electricitymap.config import TOKEN_ENV_VAR
from electricitymap.exceptions import HTTPStatusError
from electricitymap.models import CarbonIntensity, PowerBreakdown, Zone


@pytest.fixture(name="calls")
def fixture_calls(monkeypatch) -> list:
    """Record transport calls and answer with a canned record per destination."""
    calls: list = []
    canned: Dict[Any, Any] = {
        CarbonIntensity: CarbonIntensity(zone="DE", carbonIntensity=241.0),
        PowerBreakdown: PowerBreakdown.model_validate(
            {"zone": "DE", "powerConsumptionBreakdown": {"battery discharge": 1.5}}
        ),
    }

    def fake_http_get(url: str, headers: dict, params: dict, destination: Any):
        calls.append({"url": url, "headers": headers, "params": params})
        return canned.get(destination, {"DE": Zone(countryName="Germany", zoneName="Germany")})

    monkeypatch.setattr(client_module, "http_get", fake_http_get)
    monkeypatch.delenv(TOKEN_ENV_VAR, raising=False)
    return calls


def test_every_client_operation_is_exposed() -> None:
    assert len(OPERATIONS) == 9


def test_live_carbon_intensity(calls: list, capsys) -> None:
    exit_code = main(["carbon-intensity-latest", "--zone", "DE", "--api-token", "token"])

    assert exit_code == 0
    assert calls[0]["url"].endswith("/carbon-intensity/latest")
    assert calls[0]["headers"] == {"auth-token": "token"}
    assert calls[0]["params"] == {"zone": "DE"}
    output = json.loads(capsys.readouterr().out)
    assert output["zone"] == "DE"
    assert output["carbonIntensity"] == 241.0


def test_output_uses_wire_names(calls: list, capsys) -> None:
    exit_code = main(["power-breakdown-latest", "--zone", "DE", "--api-token", "token"])

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["powerConsumptionBreakdown"]["battery discharge"] == 1.5


def test_zones(calls: list, capsys) -> None:
    exit_code = main(["zones", "--api-token", "token"])

    assert exit_code == 0
    assert calls[0]["params"] == {}
    assert json.loads(capsys.readouterr().out)["DE"]["zoneName"] == "Germany"


def test_range_arguments(calls: list, monkeypatch) -> None:
    monkeypatch.setenv(TOKEN_ENV_VAR, "env-token")

    exit_code = main(
        [
            "carbon-intensity-past-range",
            "--lon",
            "13.4",
            "--lat",
            "52.5",
            "--start",
            "2023-01-01T00:00:00Z",
            "--end",
            "2023-01-10T00:00:00Z",
            "--estimation-fallback",
        ]
    )

    assert exit_code == 0
    assert calls[0]["headers"] == {"auth-token": "env-token"}
    assert calls[0]["params"] == {
        "lon": "13.4",
        "lat": "52.5",
        "start": "2023-01-01T00:00:00Z",
        "end": "2023-01-10T00:00:00Z",
        "estimationFallback": "true",
    }


def test_api_error_exits_non_zero(monkeypatch) -> None:
    def failing_http_get(*_args, **_kwargs):
        raise HTTPStatusError(404, "Not Found")

    monkeypatch.setattr(client_module, "http_get", failing_http_get)

    assert main(["carbon-intensity-latest", "--zone", "XX", "--api-token", "token"]) == 1


def test_incomplete_geolocation_exits_non_zero(calls: list) -> None:
    assert main(["carbon-intensity-latest", "--lon", "13.4", "--api-token", "token"]) == 1
    assert not calls


def test_missing_config_file(calls: list) -> None:
    assert main(["zones", "--config", "nonexistent.yml"]) == 2
    assert not calls


def test_config_without_token(calls: list, tmp_path) -> None:
    path = tmp_path / "config.yml"
    path.write_text("logging:\n  level: WARNING\n", encoding="utf-8")

    assert main(["zones", "--config", str(path)]) == 1
    assert not calls
