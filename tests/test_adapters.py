import requests

from adapters import distance, mailer
from adapters.config_loader import load_payment_tables
from adapters.distance import DistanceClient, round_miles
from adapters.mailer import Mailer


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self._payload = payload or {}
        self.status_code = status_code
        self.ok = 200 <= status_code < 300

    def json(self):
        return self._payload


def test_round_miles():
    assert round_miles(48280) == 30
    assert round_miles(800) == 0
    assert round_miles(900) == 1


def test_distance_lookup_parses_matrix(monkeypatch):
    calls = {}

    def fake_get(url, params, timeout):
        calls["params"] = params
        return FakeResponse({
            "status": "OK",
            "rows": [{"elements": [{
                "status": "OK",
                "distance": {"value": 48280, "text": "30.0 mi"},
                "duration": {"text": "35 mins"},
            }]}],
        })

    monkeypatch.setattr(distance.requests, "get", fake_get)
    result = DistanceClient("key").lookup("Chicago, IL", "Lake Geneva, WI")
    assert result == {"miles": 30, "distance_text": "30.0 mi", "duration_text": "35 mins"}
    assert calls["params"]["units"] == "imperial"


def test_distance_failure_leaves_miles_unset(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(distance.requests, "get", boom)
    assert DistanceClient("key").miles("a", "b") is None

    monkeypatch.setattr(distance.requests, "get", lambda *a, **k: FakeResponse({"status": "REQUEST_DENIED"}))
    assert DistanceClient("key").miles("a", "b") is None


def test_distance_without_key_does_not_call_out(monkeypatch):
    def unexpected(*args, **kwargs):
        raise AssertionError("no request expected")

    monkeypatch.setattr(distance.requests, "get", unexpected)
    assert DistanceClient(None).lookup("a", "b") is None


def test_mailer_reports_delivery(monkeypatch):
    sent = {}

    def fake_post(url, json, headers, timeout):
        sent.update(json)
        return FakeResponse({"id": "abc"})

    monkeypatch.setattr(mailer.requests, "post", fake_post)
    assert Mailer("key").send("w@example.com", "Hi", "<p>Hi</p>") is True
    assert sent["to"] == ["w@example.com"]

    monkeypatch.setattr(mailer.requests, "post", lambda *a, **k: FakeResponse(status_code=422))
    assert Mailer("key").send("w@example.com", "Hi", "<p>Hi</p>") is False


def test_mailer_network_error_is_not_raised(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.Timeout("slow")

    monkeypatch.setattr(mailer.requests, "post", boom)
    assert Mailer("key").send("w@example.com", "Hi", "<p>Hi</p>") is False


def test_load_payment_tables_from_yaml(tmp_path):
    path = tmp_path / "rates.yaml"
    path.write_text(
        "pay_rates:\n  Dealer: 22\ntravel_tiers:\n  - {min_miles: 0, max_miles: 10, pay_amount: 5}\n",
        encoding="utf-8",
    )
    tables = load_payment_tables(path)
    assert tables["pay_rates"] == {"Dealer": 22}
    assert tables["travel_tiers"][0]["pay_amount"] == 5
    assert tables["bonuses"] == {}
