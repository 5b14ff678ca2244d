"""
sss-recover Web API tests.

Drives the aiohttp app through aiohttp.test_utils with asyncio.run.
"""

import asyncio
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aiohttp import test_utils

from web import app as web_app
from sss_recover.recovery import DEFAULT_PRIME


SAMPLE_1 = {
    "keys": {"n": 4, "k": 3},
    "1": {"base": "10", "value": "4"},
    "2": {"base": "2", "value": "111"},
    "3": {"base": "10", "value": "12"},
    "6": {"base": "4", "value": "213"},
}


def _post(path, **kwargs):
    async def go():
        async with test_utils.TestClient(
                test_utils.TestServer(web_app.create_app())) as client:
            resp = await client.post(path, **kwargs)
            return resp.status, await resp.json()
    return asyncio.run(go())


def test_api_reconstruct_exact():
    status, body = _post("/api/reconstruct", json={"shares": SAMPLE_1})
    assert status == 200
    assert body["ok"] is True
    assert body["secret"] == "3"
    assert body["mode"] == "exact"
    assert "modulus" not in body
    assert [s["x"] for s in body["used"]] == [1, 2, 3]


def test_api_reconstruct_modular_default_prime():
    status, body = _post("/api/reconstruct", json={"shares": SAMPLE_1, "mode": "modular"})
    assert status == 200
    assert body["secret"] == "3"
    assert body["modulus"] == str(DEFAULT_PRIME)


def test_api_reconstruct_modular_custom_prime():
    status, body = _post("/api/reconstruct",
                         json={"shares": SAMPLE_1, "mode": "modular", "modulus": "7"})
    assert status == 200
    assert body["secret"] == "3"
    assert body["modulus"] == "7"


def test_api_reconstruct_reports_dropped():
    shares = dict(SAMPLE_1)
    shares["9"] = {"base": "99", "value": "1"}
    shares["keys"] = {"n": 5, "k": 3}
    status, body = _post("/api/reconstruct", json={"shares": shares})
    assert status == 200
    assert [d["x"] for d in body["dropped"]] == ["9"]


def test_api_reconstruct_errors():
    status, body = _post("/api/reconstruct", data="not json",
                         headers={"Content-Type": "application/json"})
    assert status == 400
    assert body["ok"] is False

    status, body = _post("/api/reconstruct", json={"mode": "exact"})
    assert status == 400
    assert "shares" in body["error"].lower()

    bad = dict(SAMPLE_1, keys={"n": 4, "k": 9})
    status, body = _post("/api/reconstruct", json={"shares": bad})
    assert status == 400
    assert "threshold" in body["error"].lower()

    status, body = _post("/api/reconstruct",
                         json={"shares": SAMPLE_1, "mode": "modular", "modulus": "2"})
    assert status == 400

    status, body = _post("/api/reconstruct", json={"shares": SAMPLE_1, "mode": "fuzzy"})
    assert status == 400


def test_api_reconstruct_degenerate_shares():
    shares = {
        "keys": {"n": 2, "k": 2},
        "1": {"base": "10", "value": "4"},
        "01": {"base": "10", "value": "5"},
    }
    status, body = _post("/api/reconstruct", json={"shares": shares})
    assert status == 400
    assert "duplicate" in body["error"].lower()


def test_api_inspect():
    status, body = _post("/api/inspect", json={"shares": SAMPLE_1})
    assert status == 200
    assert body["ok"] is True
    assert body["used"] == [
        {"x": 1, "y": "4"}, {"x": 2, "y": "7"}, {"x": 3, "y": "12"},
    ]

    status, body = _post("/api/inspect", json={"shares": {"1": {}}})
    assert status == 400


def test_api_reconstruct_big_secret():
    big = 10 ** 5000
    shares = {
        "keys": {"n": 2, "k": 2},
        "1": {"base": "16", "value": format(big + 1, "x")},
        "2": {"base": "16", "value": format(big + 2, "x")},
    }
    status, body = _post("/api/reconstruct", json={"shares": shares})
    assert status == 200
    assert body["secret"] == "1" + "0" * 5000
    assert body["used"][1]["y"] == "1" + "0" * 4999 + "2"


def test_api_reconstruct_strict_as_string():
    shares = {
        "keys": {"n": 2, "k": 2},
        "1": {"base": "10", "value": "1"},
        "3": {"base": "10", "value": "0"},
    }
    status, body = _post("/api/reconstruct", json={"shares": shares, "strict": "false"})
    assert status == 200
    assert body["secret"] == "1"
    assert body["strict"] is False

    status, body = _post("/api/reconstruct", json={"shares": shares, "strict": "true"})
    assert status == 400
    assert "not an integer" in body["error"]

    status, body = _post("/api/reconstruct", json={"shares": shares, "strict": "maybe"})
    assert status == 400
