"""Zengin transfer-field validation endpoint."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from furikomi.api.responses import failure_body, parse_amount, success_body
from furikomi.core.config import AppSettings
from furikomi.models.errors import InvalidAmount, ReferenceDataUnavailable
from furikomi.models.transfer import TransferRequest, TransferResult
from furikomi.services.zengin_validator import ZenginValidator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["zengin"])


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_validator(request: Request) -> ZenginValidator:
    return ZenginValidator(request.app.state.reference_data)


@router.options("/zengin")
async def zengin_preflight() -> Response:
    return Response(status_code=200)


@router.get("/zengin")
def validate_transfer(
    bank_code: Optional[str] = None,
    branch_code: Optional[str] = None,
    account_type: Optional[str] = None,
    account_number: Optional[str] = None,
    account_holder_kana: Optional[str] = None,
    amount: Optional[str] = None,
    settings: AppSettings = Depends(get_settings),
    validator: ZenginValidator = Depends(get_validator),
) -> JSONResponse:
    """Validate bank/branch codes and return the normalized transfer fields."""
    try:
        parsed_amount = parse_amount(amount)
        amount_ok = parsed_amount is None or parsed_amount >= 0
    except ValueError:
        parsed_amount = None
        amount_ok = False
    received = {
        "bank_code": bank_code,
        "branch_code": branch_code,
        "account_type": account_type,
        "account_number": account_number,
        "account_holder_kana": account_holder_kana,
        "amount": parsed_amount,
    }
    tz_name = settings.timezone

    if not amount_ok:
        error = InvalidAmount(raw=amount or "")
        logger.info("Rejected transfer: %s", error.message)
        return JSONResponse(failure_body(error, received, tz_name=tz_name), status_code=400)

    transfer = TransferRequest(
        bank_code=bank_code,
        branch_code=branch_code,
        account_type=account_type,
        account_number=account_number,
        account_holder_kana=account_holder_kana,
        amount=parsed_amount or 0,
    )
    outcome = validator.validate(transfer)

    if isinstance(outcome, TransferResult):
        return JSONResponse(success_body(transfer, outcome, tz_name=tz_name), status_code=200)

    status_code = 400
    if isinstance(outcome, ReferenceDataUnavailable):
        status_code = settings.api.reference_error_status
    return JSONResponse(failure_body(outcome, received, tz_name=tz_name), status_code=status_code)
