"""
Pytest fixtures for the BRI Direct Debit SDK tests.

``FakeSession`` stands in for the HTTP transport: it records every prepared
request it is asked to send and replays scripted responses or exceptions.
"""

import io
import json

import pytest
import requests

import bri_directdebit.client as client_module
from bri_directdebit import Client, DirectDebitClient, NullSink

FIXED_TIMESTAMP = "20210101000000"
SECRET = "s"
TOKEN = "t"
SANDBOX_HOST = "https://sandbox.partner.api.bri.co.id"


def make_response(status_code: int = 200, body=b"", url: str = SANDBOX_HOST) -> requests.Response:
    if isinstance(body, (dict, list)):
        body = json.dumps(body).encode("utf-8")
    elif isinstance(body, str):
        body = body.encode("utf-8")
    resp = requests.Response()
    resp.status_code = status_code
    resp.raw = io.BytesIO(body)
    resp.url = url
    return resp


class FakeSession(requests.Session):
    def __init__(self):
        super().__init__()
        self.script = []
        self.sent = []
        self.send_kwargs = []

    def queue(self, status_code: int = 200, body=b""):
        self.script.append(make_response(status_code, body))

    def queue_error(self, exc: Exception):
        self.script.append(exc)

    def send(self, request, **kwargs):
        self.sent.append(request)
        self.send_kwargs.append(kwargs)
        if not self.script:
            raise AssertionError(f"No scripted response for {request.method} {request.url}")
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        item.request = request
        return item


class RecordingSink:
    def __init__(self):
        self.lines = []

    def write(self, level: int, line: str) -> None:
        self.lines.append((level, line))


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []
    monkeypatch.setattr(client_module.time, "sleep", lambda s: recorded.append(s))
    return recorded


@pytest.fixture
def client(session, sleeps):
    return Client(
        direct_debit_base_url=SANDBOX_HOST,
        client_id="id",
        client_secret=SECRET,
        logger=NullSink(),
        clock=lambda: FIXED_TIMESTAMP,
        session=session,
    )


@pytest.fixture
def production_client(session, sleeps):
    return Client(
        direct_debit_base_url="https://partner.api.bri.co.id",
        client_secret=SECRET,
        logger=NullSink(),
        is_production=True,
        clock=lambda: FIXED_TIMESTAMP,
        session=session,
    )


@pytest.fixture
def dd(client):
    return DirectDebitClient(client)
