import sys
from pathlib import Path

import pytest
import requests

sys.path.insert(0, str(Path(__file__).parent.parent))

BASE = "https://api-{id}.example.test/v1/"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Routes GETs by URL; a route may be a FakeResponse or an exception to raise."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self.timeouts = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        self.timeouts.append(timeout)
        if url not in self.routes:
            return FakeResponse(status_code=404, reason="Not Found")
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        return route


class NoNetworkSession:
    def __init__(self):
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        raise AssertionError(f"unexpected request: {url}")


def status_payload(bonded, not_bonded=0, n=3):
    return {"total_validator_num": n, "bonded_tokens": str(bonded), "not_bonded_tokens": str(not_bonded)}


def validators_payload(pairs):
    return [{"moniker": m, "tokens": str(t)} for m, t in pairs]


def zone_routes(zone_id, bonded, validators, not_bonded=0):
    base = BASE.format(id=zone_id)
    return {
        base + "status": FakeResponse(payload=status_payload(bonded, not_bonded, len(validators))),
        base + "staking/validators": FakeResponse(payload=validators_payload(validators)),
    }


def make_snapshot(name, bonded, validators, zone_id=None, not_bonded=0):
    snap = {
        "zone": {"id": zone_id or name.lower(), "name": name},
        "total_validator_num": len(validators or []),
        "bonded_tokens": bonded,
        "not_bonded_tokens": not_bonded,
    }
    if validators is not None:
        snap["validators"] = [{"moniker": m, "tokens": t} for m, t in validators]
    return snap


@pytest.fixture
def no_sleep(monkeypatch):
    slept = []
    monkeypatch.setattr("snapshots.time.sleep", lambda s: slept.append(s))
    return slept
