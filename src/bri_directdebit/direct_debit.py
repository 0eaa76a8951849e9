"""
Direct Debit — typed operations over the signed BRI transport.

Bind a customer's card (OTP), charge it (OTP), look a charge up, refund it.

Usage:
    from bri_directdebit import Client, DirectDebitClient

    dd = DirectDebitClient(Client.from_env())

    # Bind a card; the bank sends an OTP to the customer's phone
    reg = dd.create_card_token_otp(token, {"body": {"cardPan": "...", "phoneNumber": "..."}})
    card = dd.create_card_token_otp_verify(token, {"body": {"registrationId": reg.registration_id, "passcode": "999999"}})

    # Charge it
    charge = dd.create_payment_charge_otp(token, {"body": {"cardToken": card.card_token, "amount": "10000.00", "currency": "IDR"}})
    try:
        paid = dd.create_payment_charge_otp_verify(token, {"body": {"paymentId": charge.payment_id, "passcode": "999999"}})
    except PendingTransaction:
        paid = dd.charge_detail(token, {"body": {"paymentId": charge.payment_id}})
"""

from bri_directdebit import models
from bri_directdebit.client import Client
from bri_directdebit.errors import RequestBuildError
from bri_directdebit.signature import generate_signature


class DirectDebitClient:
    """Direct Debit operations. Wraps a configured ``Client``.

    Every method takes the caller's raw access token (the SDK adds the
    ``Bearer `` prefix) and a request record or an equivalent dict. Failures
    raise the exceptions in ``bri_directdebit.errors``; a ``RemoteError``
    carries the decoded ``ErrorResponse`` in ``payload``.
    """

    def __init__(self, client: Client):
        self.client = client

    def _signed_headers(self, path: str, method: str, token: str, body: str) -> dict:
        timestamp = self.client.clock()
        signature = generate_signature(path, method, token, timestamp, body, self.client.client_secret)
        if not timestamp or not signature:
            raise self.client._fail(RequestBuildError("cannot sign request without timestamp and signature"))
        return {
            "Authorization": token,
            "BRI-Timestamp": timestamp,
            "BRI-Signature": signature,
            "Content-Type": "application/json",
        }

    def _call(self, method: str, path: str, token: str, req: models.BRIRequest, response_cls, cancel=None):
        token = "Bearer " + token
        body = req.to_json()
        headers = self._signed_headers(path, method, token, body)
        return self.client.call(
            method,
            self.client.direct_debit_base_url + path,
            headers,
            body,
            decode=response_cls.decode,
            decode_error=models.ErrorResponse.decode,
            cancel=cancel,
        )

    # --- Card binding ---

    def create_card_token_otp(self, token: str, req, cancel=None) -> models.CardTokenOTPResponse:
        """Check the customer's card details against bank data and send an OTP.

        ``otpBriStatus`` is always sent as ``"YES"``.
        """
        req = models.CardTokenOTPRequest.model_validate(req)
        req = req.model_copy(update={"body": req.body.model_copy(update={"otp_bri_status": "YES"})})
        return self._call(
            "POST", self.client.endpoints.create_card_token_otp, token, req,
            models.CardTokenOTPResponse, cancel,
        )

    def create_card_token_otp_verify(self, token: str, req, cancel=None) -> models.CardTokenOTPVerifyResponse:
        """Confirm a card binding with the OTP the customer received."""
        req = models.CardTokenOTPVerifyRequest.model_validate(req)
        return self._call(
            "PATCH", self.client.endpoints.create_card_token_otp_verify, token, req,
            models.CardTokenOTPVerifyResponse, cancel,
        )

    def delete_card_token(self, token: str, req, cancel=None) -> models.DeleteCardTokenResponse:
        """Unbind a card token."""
        req = models.DeleteCardTokenRequest.model_validate(req)
        return self._call(
            "DELETE", self.client.endpoints.delete_card_token, token, req,
            models.DeleteCardTokenResponse, cancel,
        )

    # --- Charges ---

    def create_payment_charge_otp(self, token: str, req, cancel=None) -> models.PaymentChargeOTPResponse:
        """Start a charge against a bound card; the bank sends an OTP."""
        req = models.PaymentChargeOTPRequest.model_validate(req)
        return self._call(
            "POST", self.client.endpoints.create_payment_charge_otp, token, req,
            models.PaymentChargeOTPResponse, cancel,
        )

    def create_payment_charge_otp_verify(self, token: str, req, cancel=None) -> models.PaymentChargeOTPVerifyResponse:
        """Complete a charge with the customer's OTP.

        May raise PendingTransaction; follow up with ``charge_detail``.
        """
        req = models.PaymentChargeOTPVerifyRequest.model_validate(req)
        return self._call(
            "POST", self.client.endpoints.create_payment_charge_otp_verify, token, req,
            models.PaymentChargeOTPVerifyResponse, cancel,
        )

    def charge_detail(self, token: str, req, cancel=None) -> models.ChargeDetailResponse:
        req = models.ChargeDetailRequest.model_validate(req)
        return self._call(
            "POST", self.client.endpoints.charge_detail, token, req,
            models.ChargeDetailResponse, cancel,
        )

    def refund_direct_debit(self, token: str, req, cancel=None) -> models.RefundResponse:
        req = models.RefundRequest.model_validate(req)
        return self._call(
            "POST", self.client.endpoints.refund_direct_debit, token, req,
            models.RefundResponse, cancel,
        )
