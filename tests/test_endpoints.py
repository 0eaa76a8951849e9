"""Tests for the endpoint tables and environment switching."""

from dataclasses import FrozenInstanceError, fields

import pytest

from bri_directdebit import Client, NullSink
from bri_directdebit.endpoints import (
    PRODUCTION_ENDPOINTS,
    SANDBOX_ENDPOINTS,
    _TAGS,
    endpoints_for,
)


def test_tags_cover_every_field():
    assert set(_TAGS.values()) == {f.name for f in fields(SANDBOX_ENDPOINTS)}


@pytest.mark.parametrize("table,prefix", [
    (SANDBOX_ENDPOINTS, "/sandbox/v1/directdebit/"),
    (PRODUCTION_ENDPOINTS, "/v1/rt-directdebit/"),
])
def test_every_path_has_environment_prefix(table, prefix):
    for f in fields(table):
        assert getattr(table, f.name).startswith(prefix)


def test_production_paths():
    assert PRODUCTION_ENDPOINTS.path("createCardTokenOTP") == "/v1/rt-directdebit/tokens"
    assert PRODUCTION_ENDPOINTS.path("createCardTokenOTPVerify") == "/v1/rt-directdebit/tokens"
    assert PRODUCTION_ENDPOINTS.path("deleteCardToken") == "/v1/rt-directdebit/tokens"
    assert PRODUCTION_ENDPOINTS.path("createPaymentChargeOTP") == "/v1/rt-directdebit/charges"
    assert PRODUCTION_ENDPOINTS.path("createPaymentChargeOTPVerify") == "/v1/rt-directdebit/charges/verify"
    assert PRODUCTION_ENDPOINTS.path("chargeDetail") == "/v1/rt-directdebit/charges/inquiry"
    assert PRODUCTION_ENDPOINTS.path("refundDirectDebit") == "/v1/rt-directdebit/refunds"


def test_unknown_tag():
    with pytest.raises(KeyError):
        SANDBOX_ENDPOINTS.path("transfer")


def test_tables_are_immutable():
    with pytest.raises(FrozenInstanceError):
        SANDBOX_ENDPOINTS.refund_direct_debit = "/elsewhere"


def test_endpoints_for():
    assert endpoints_for(True) is SANDBOX_ENDPOINTS
    assert endpoints_for(False) is PRODUCTION_ENDPOINTS


class TestClientSelection:
    def test_default_is_sandbox(self):
        assert Client(logger=NullSink()).endpoints is SANDBOX_ENDPOINTS

    def test_production_flag(self):
        assert Client(logger=NullSink(), is_production=True).endpoints is PRODUCTION_ENDPOINTS

    def test_use_sandbox_prefix_swaps_whole_table(self):
        client = Client(logger=NullSink(), is_production=True)
        client.use_sandbox_prefix(True)
        assert client.endpoints is SANDBOX_ENDPOINTS
        client.use_sandbox_prefix(False)
        assert client.endpoints is PRODUCTION_ENDPOINTS

    def test_clients_do_not_share_environment(self):
        sandbox = Client(logger=NullSink())
        production = Client(logger=NullSink(), is_production=True)
        sandbox.use_sandbox_prefix(True)
        assert production.endpoints is PRODUCTION_ENDPOINTS
