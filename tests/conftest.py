from __future__ import annotations

import os
import sys
from pathlib import Path

import httpx
import pytest

# Make package importable when running tests from the repository root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from oeis_client.config import ClientConfig  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: tests that call the live OEIS service",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if os.getenv("OEIS_RUN_INTEGRATION") == "1":
        return

    skip_integration = pytest.mark.skip(
        reason="Set OEIS_RUN_INTEGRATION=1 to run integration tests"
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


def record_payload(number: int = 45, **fields) -> dict:
    payload = {
        "number": number,
        "data": "0,1,1,2,3,5,8,13,21,34",
        "name": f"Sequence {number}",
    }
    payload.update(fields)
    return payload


FIBONACCI = record_payload(
    45,
    name="Fibonacci numbers: F(n) = F(n-1) + F(n-2) with F(0) = 0 and F(1) = 1.",
    comment=[
        "Also called Lamé's sequence. - _N. J. A. Sloane_, Jan 01 2000",
        "Number of compositions of n into parts 1 and 2. _Ron Knott_.",
    ],
    reference=["A. T. Benjamin and J. J. Quinn, Proofs that really count. _Clark Kimberling_"],
    link=[
        'N. J. A. Sloane, <a href="/A000045/b000045.txt">The first 2000 Fibonacci numbers: Table of n, F(n) for n = 0..2000</a>',
        'Ron Knott, <a href="http://www.maths.surrey.ac.uk/hosted-sites/R.Knott/Fibonacci/fib.html">Fibonacci Numbers and the Golden Section</a>',
    ],
    xref=["Cf. A000032, A000204.", "See also A000032 and A001906."],
    keyword="core,nonn,nice,easy",
    offset="0,4",
    created="1991-04-30T03:00:00-04:00",
    time="2024-01-02T10:11:12-05:00",
    revision=1000,
    references=300,
)


class Recorder:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, responder):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig()


@pytest.fixture()
def fib_payload() -> dict:
    return dict(FIBONACCI)


@pytest.fixture()
def mock_client():
    clients: list[httpx.Client] = []

    def factory(responder):
        recorder = Recorder(responder)
        client = httpx.Client(transport=httpx.MockTransport(recorder))
        client.recorder = recorder
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()
