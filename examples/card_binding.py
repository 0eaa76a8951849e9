#!/usr/bin/env python3
"""
BRI Direct Debit Example — Bind a Card, Charge It, Refund It

Walks through the full Direct Debit flow against the BRI sandbox:
  1. Register a card; BRI sends an OTP to the customer's phone
  2. Verify the registration with that OTP to obtain a card token
  3. Charge the card token; BRI sends another OTP
  4. Verify the charge (falls back to an inquiry if it is still pending)
  5. Refund the charge

Prerequisites:
  pip install bri-directdebit

  Set your sandbox credentials and an access token obtained from BRI's
  OAuth endpoint:

    export BRI_DIRECT_DEBIT_BASE_URL="https://sandbox.partner.api.bri.co.id"
    export BRI_CLIENT_ID="..."
    export BRI_CLIENT_SECRET="..."
    export BRI_ACCESS_TOKEN="..."

Usage:
  python card_binding.py --card-pan 5221849000000138 --phone 081234567890
"""

import argparse
import os
import sys

from bri_directdebit import (
    BRIError,
    Client,
    DirectDebitClient,
    PendingTransaction,
    RemoteError,
)


def main():
    parser = argparse.ArgumentParser(description="BRI Direct Debit Example")
    parser.add_argument("--card-pan", required=True)
    parser.add_argument("--phone", required=True)
    parser.add_argument("--amount", default="10000.00")
    parser.add_argument("--verbose", action="store_true", help="log request and response bodies")
    args = parser.parse_args()

    token = os.environ.get("BRI_ACCESS_TOKEN")
    if not token:
        print("Error: BRI_ACCESS_TOKEN environment variable not set.")
        sys.exit(1)

    client = Client.from_env(log_level=3 if args.verbose else 2)
    client.use_sandbox_prefix(True)
    dd = DirectDebitClient(client)

    try:
        reg = dd.create_card_token_otp(token, {"body": {"cardPan": args.card_pan, "phoneNumber": args.phone}})
        otp = input("Card registration OTP: ").strip()
        card = dd.create_card_token_otp_verify(token, {"body": {"registrationId": reg.registration_id, "passcode": otp}})
        print(f"Card token: {card.card_token}")

        charge = dd.create_payment_charge_otp(token, {
            "body": {"cardToken": card.card_token, "amount": args.amount, "currency": "IDR", "remarks": "example"},
        })
        otp = input("Charge OTP: ").strip()
        try:
            paid = dd.create_payment_charge_otp_verify(token, {"body": {"paymentId": charge.payment_id, "passcode": otp}})
        except PendingTransaction:
            print("Charge pending, checking status...")
            paid = dd.charge_detail(token, {"body": {"paymentId": charge.payment_id}})
        print(f"Payment {paid.payment_id}: {paid.payment_status}")

        refund = dd.refund_direct_debit(token, {
            "body": {"cardToken": card.card_token, "paymentId": charge.payment_id, "amount": args.amount, "currency": "IDR"},
        })
        print(f"Refund {refund.refund_id}: {refund.refund_status}")
    except RemoteError as e:
        print(f"BRI rejected the request: {e.payload.error_code} {e.payload.error_desc}")
        sys.exit(1)
    except BRIError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        client.close()


if __name__ == "__main__":
    main()
