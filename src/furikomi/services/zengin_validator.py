"""Zengin transfer validation and formatting.

Linear pipeline with early exit: required fields, bank code, branch code,
then pure formatting of the remaining fields. Failures are returned as
values from ``furikomi.models.errors``, never raised.
"""

from __future__ import annotations

import logging
from typing import Union

from furikomi.core.exceptions import ReferenceDataError
from furikomi.core.protocols import IReferenceData
from furikomi.formatting import (
    format_amount,
    pad_bank_code,
    pad_branch_code,
    resolve_account_type,
    to_hankaku_kana,
)
from furikomi.models.errors import (
    InvalidBankCode,
    InvalidBranchCode,
    MissingParameter,
    ReferenceDataUnavailable,
    ValidationError,
)
from furikomi.models.transfer import TransferRequest, TransferResult

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("bank_code", "branch_code", "account_number")

TransferOutcome = Union[TransferResult, ValidationError]


def check_required(request: TransferRequest) -> MissingParameter | None:
    """Return the first required field that is absent or blank."""
    for field_name in REQUIRED_FIELDS:
        value = getattr(request, field_name)
        if value is None or not value.strip():
            return MissingParameter(field_name=field_name)
    return None


def validate_and_format(request: TransferRequest, reference_data: IReferenceData) -> TransferOutcome:
    """Validate a transfer request and return its normalized Zengin fields."""
    missing = check_required(request)
    if missing is not None:
        logger.info("Rejected transfer: %s", missing.message)
        return missing

    bank_code = request.bank_code.strip()  # type: ignore[union-attr]
    branch_code = request.branch_code.strip()  # type: ignore[union-attr]
    account_number = request.account_number.strip()  # type: ignore[union-attr]

    formatted_bank_code = pad_bank_code(bank_code)
    try:
        bank = reference_data.get_banks().get(formatted_bank_code)
    except ReferenceDataError as exc:
        logger.error("Bank table unavailable: %s", exc)
        return ReferenceDataUnavailable(table_name=exc.table_name, reason=exc.reason)
    if bank is None:
        error = InvalidBankCode(raw=bank_code, formatted=formatted_bank_code)
        logger.info("Rejected transfer: %s", error.message)
        return error

    formatted_branch_code = pad_branch_code(branch_code)
    try:
        branch = reference_data.get_branches(formatted_bank_code).get(formatted_branch_code)
    except ReferenceDataError as exc:
        logger.warning("Branch table unavailable for bank %s: %s", formatted_bank_code, exc)
        return ReferenceDataUnavailable(table_name=exc.table_name, reason=exc.reason)
    if branch is None:
        error = InvalidBranchCode(
            raw=branch_code, formatted=formatted_branch_code, bank_code=bank_code,
        )
        logger.info("Rejected transfer: %s", error.message)
        return error

    return TransferResult(
        formatted_bank_code=formatted_bank_code,
        formatted_branch_code=formatted_branch_code,
        formatted_account_number=account_number,
        account_type_description=resolve_account_type(request.account_type or ""),
        formatted_amount=format_amount(request.amount),
        account_holder_kana_normalized=to_hankaku_kana(request.account_holder_kana or ""),
        resolved_bank_name=bank.name,
        resolved_branch_name=branch.name,
    )


class ZenginValidator:
    """Binds a reference-data source to ``validate_and_format``."""

    def __init__(self, reference_data: IReferenceData) -> None:
        self._reference_data = reference_data

    def validate(self, request: TransferRequest) -> TransferOutcome:
        return validate_and_format(request, self._reference_data)
