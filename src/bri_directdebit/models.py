"""
Typed request and response records for the Direct Debit API.

Field names are snake_case in Python and camelCase on the wire. Requests nest
their fields under ``body``, as the bank expects:

    {"body": {"cardPan": "4111...", "otpBriStatus": "YES"}}
"""

import json
from typing import Any, ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from bri_directdebit.errors import DecodeError


class BRIModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# --- Requests ---


class BRIRequest(BRIModel):
    def to_json(self) -> str:
        """Serialize exactly as sent on the wire (and signed)."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class CardTokenOTPRequestBody(BRIModel):
    card_pan: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    login_id: Optional[str] = None
    otp_bri_status: Optional[str] = None
    additional_data: Optional[Dict[str, Any]] = None


class CardTokenOTPRequest(BRIRequest):
    body: CardTokenOTPRequestBody


class CardTokenOTPVerifyRequestBody(BRIModel):
    registration_id: Optional[str] = None
    passcode: Optional[str] = None


class CardTokenOTPVerifyRequest(BRIRequest):
    body: CardTokenOTPVerifyRequestBody


class DeleteCardTokenRequestBody(BRIModel):
    card_token: Optional[str] = None


class DeleteCardTokenRequest(BRIRequest):
    body: DeleteCardTokenRequestBody


class PaymentChargeOTPRequestBody(BRIModel):
    card_token: Optional[str] = None
    amount: Optional[str] = None
    currency: Optional[str] = None
    remarks: Optional[str] = None
    otp_bri_status: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class PaymentChargeOTPRequest(BRIRequest):
    body: PaymentChargeOTPRequestBody


class PaymentChargeOTPVerifyRequestBody(BRIModel):
    payment_id: Optional[str] = None
    passcode: Optional[str] = None


class PaymentChargeOTPVerifyRequest(BRIRequest):
    body: PaymentChargeOTPVerifyRequestBody


class ChargeDetailRequestBody(BRIModel):
    payment_id: Optional[str] = None


class ChargeDetailRequest(BRIRequest):
    body: ChargeDetailRequestBody


class RefundRequestBody(BRIModel):
    card_token: Optional[str] = None
    payment_id: Optional[str] = None
    amount: Optional[str] = None
    currency: Optional[str] = None
    reason: Optional[str] = None


class RefundRequest(BRIRequest):
    body: RefundRequestBody


# --- Responses ---


class BRIResponse(BRIModel):
    """Base for every decoded response.

    Unknown keys are ignored, but a body must be a JSON object carrying at
    least one key specific to the record. ``status`` appears in every BRI
    envelope, so it alone does not identify a shape.
    """

    envelope_keys: ClassVar[frozenset] = frozenset({"status"})

    status: Optional[Any] = None

    @model_validator(mode="before")
    @classmethod
    def require_known_key(cls, data):
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        known = set()
        for name, field in cls.model_fields.items():
            if name in cls.envelope_keys:
                continue
            known.add(name)
            if field.alias:
                known.add(field.alias)
        if not known.intersection(data):
            raise ValueError(f"body does not match {cls.__name__}")
        return data

    @classmethod
    def decode(cls, raw: bytes):
        """Decode a raw response body, raising DecodeError on mismatch."""
        try:
            return cls.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            raise DecodeError(f"cannot decode {cls.__name__}: {e}") from e


class CardTokenOTPResponse(BRIResponse):
    card_token: Optional[str] = None
    registration_id: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    otp_bri_status: Optional[str] = None
    otp_expired_at: Optional[str] = None
    additional_data: Optional[Dict[str, Any]] = None


class CardTokenOTPVerifyResponse(BRIResponse):
    card_token: Optional[str] = None
    card_pan: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    expired_at: Optional[str] = None
    limit: Optional[str] = None


class DeleteCardTokenResponse(BRIResponse):
    card_token: Optional[str] = None
    deleted_at: Optional[str] = None


class PaymentChargeOTPResponse(BRIResponse):
    payment_id: Optional[str] = None
    card_token: Optional[str] = None
    amount: Optional[str] = None
    currency: Optional[str] = None
    remarks: Optional[str] = None
    otp_expired_at: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class PaymentChargeOTPVerifyResponse(BRIResponse):
    payment_id: Optional[str] = None
    payment_status: Optional[str] = None
    amount: Optional[str] = None
    currency: Optional[str] = None
    remarks: Optional[str] = None
    transaction_date: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class RefundHistory(BRIModel):
    refund_id: Optional[str] = None
    amount: Optional[str] = None
    refund_date: Optional[str] = None
    reason: Optional[str] = None


class ChargeDetailResponse(BRIResponse):
    payment_id: Optional[str] = None
    payment_status: Optional[str] = None
    amount: Optional[str] = None
    currency: Optional[str] = None
    remarks: Optional[str] = None
    transaction_date: Optional[str] = None
    refund_history: Optional[List[RefundHistory]] = None
    metadata: Optional[Dict[str, Any]] = None


class RefundResponse(BRIResponse):
    refund_id: Optional[str] = None
    payment_id: Optional[str] = None
    amount: Optional[str] = None
    currency: Optional[str] = None
    reason: Optional[str] = None
    refund_status: Optional[str] = None
    refund_date: Optional[str] = None


class ErrorResponse(BRIResponse):
    """Error shape returned by the bank alongside a non-success status.

    A bare status envelope such as
    ``{"status": {"code": "0602", "desc": "Invalid Signature"}}`` is an error
    record too.
    """

    envelope_keys: ClassVar[frozenset] = frozenset()

    error_code: Optional[str] = None
    error_desc: Optional[str] = None
    error_message: Optional[str] = None
