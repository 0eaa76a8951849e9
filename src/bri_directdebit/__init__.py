"""BRI Direct Debit SDK — signed requests to the BRI Direct Debit API."""

__version__ = "0.1.0"

from bri_directdebit.client import Client
from bri_directdebit.direct_debit import DirectDebitClient
from bri_directdebit.endpoints import (
    Endpoints,
    PRODUCTION_ENDPOINTS,
    SANDBOX_ENDPOINTS,
)
from bri_directdebit.errors import (
    BRIError,
    RequestBuildError,
    TransportError,
    RequestCancelled,
    ReadError,
    InvalidURL,
    EmptyResponse,
    PendingTransaction,
    DecodeError,
    RemoteError,
)
from bri_directdebit.log import LoggerSink, NullSink, StreamSink
from bri_directdebit.models import (
    CardTokenOTPRequest,
    CardTokenOTPResponse,
    CardTokenOTPVerifyRequest,
    CardTokenOTPVerifyResponse,
    DeleteCardTokenRequest,
    DeleteCardTokenResponse,
    PaymentChargeOTPRequest,
    PaymentChargeOTPResponse,
    PaymentChargeOTPVerifyRequest,
    PaymentChargeOTPVerifyResponse,
    ChargeDetailRequest,
    ChargeDetailResponse,
    RefundRequest,
    RefundResponse,
    ErrorResponse,
)
from bri_directdebit.signature import BRI_TIME_FORMAT, generate_signature, get_timestamp
