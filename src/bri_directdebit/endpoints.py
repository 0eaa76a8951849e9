"""Direct Debit endpoint paths for the sandbox and production hosts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Endpoints:
    """One complete set of Direct Debit paths.

    Instances are immutable; switching environments means swapping the whole
    table, never editing a single path.
    """

    create_card_token_otp: str
    create_card_token_otp_verify: str
    delete_card_token: str
    create_payment_charge_otp: str
    create_payment_charge_otp_verify: str
    charge_detail: str
    refund_direct_debit: str

    def path(self, tag: str) -> str:
        """Look up a path by operation tag, e.g. ``"createCardTokenOTP"``."""
        return getattr(self, _TAGS[tag])


def _build(prefix: str) -> Endpoints:
    return Endpoints(
        create_card_token_otp=f"{prefix}/tokens",  # POST
        create_card_token_otp_verify=f"{prefix}/tokens",  # PATCH
        delete_card_token=f"{prefix}/tokens",  # DELETE
        create_payment_charge_otp=f"{prefix}/charges",  # POST
        create_payment_charge_otp_verify=f"{prefix}/charges/verify",  # POST
        charge_detail=f"{prefix}/charges/inquiry",  # POST
        refund_direct_debit=f"{prefix}/refunds",  # POST
    )


SANDBOX_PREFIX = "/sandbox/v1/directdebit"
# production paths use the "rt-" prefix
PRODUCTION_PREFIX = "/v1/rt-directdebit"

SANDBOX_ENDPOINTS = _build(SANDBOX_PREFIX)
PRODUCTION_ENDPOINTS = _build(PRODUCTION_PREFIX)

_TAGS = {
    "createCardTokenOTP": "create_card_token_otp",
    "createCardTokenOTPVerify": "create_card_token_otp_verify",
    "deleteCardToken": "delete_card_token",
    "createPaymentChargeOTP": "create_payment_charge_otp",
    "createPaymentChargeOTPVerify": "create_payment_charge_otp_verify",
    "chargeDetail": "charge_detail",
    "refundDirectDebit": "refund_direct_debit",
}


def endpoints_for(sandbox: bool) -> Endpoints:
    return SANDBOX_ENDPOINTS if sandbox else PRODUCTION_ENDPOINTS
