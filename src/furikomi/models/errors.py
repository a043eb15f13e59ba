"""Validation failures returned by the Zengin validator.

Each kind carries the fields needed to explain the failure and a
``message`` rendered for the HTTP error envelope. ``ValidationError`` is the
tagged union of all kinds, discriminated on ``kind``.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class MissingParameter(BaseModel):
    kind: Literal["missing_parameter"] = "missing_parameter"
    field_name: str

    model_config = {"frozen": True}

    @property
    def message(self) -> str:
        return f"Missing required parameter: {self.field_name}"


class InvalidBankCode(BaseModel):
    kind: Literal["invalid_bank_code"] = "invalid_bank_code"
    raw: str
    formatted: str

    model_config = {"frozen": True}

    @property
    def message(self) -> str:
        return f"Invalid bank code: {self.raw} (formatted: {self.formatted})"


class InvalidBranchCode(BaseModel):
    kind: Literal["invalid_branch_code"] = "invalid_branch_code"
    raw: str
    formatted: str
    bank_code: str

    model_config = {"frozen": True}

    @property
    def message(self) -> str:
        return (
            f"Invalid branch code: {self.raw} (formatted: {self.formatted}) "
            f"for bank code: {self.bank_code}"
        )


class ReferenceDataUnavailable(BaseModel):
    """The bank table or a branch subset is missing or corrupt.

    Server-side misconfiguration, but reported with the same status as input
    errors unless ``api.reference_error_status`` says otherwise.
    """

    kind: Literal["reference_data_unavailable"] = "reference_data_unavailable"
    table_name: str
    reason: str = ""

    model_config = {"frozen": True}

    @property
    def message(self) -> str:
        if self.reason:
            return f"Reference data unavailable: {self.table_name} ({self.reason})"
        return f"Reference data unavailable: {self.table_name}"


class InvalidAmount(BaseModel):
    kind: Literal["invalid_amount"] = "invalid_amount"
    raw: str

    model_config = {"frozen": True}

    @property
    def message(self) -> str:
        return f"Invalid amount: {self.raw} (must be a non-negative integer)"


ValidationError = Annotated[
    Union[
        MissingParameter,
        InvalidBankCode,
        InvalidBranchCode,
        ReferenceDataUnavailable,
        InvalidAmount,
    ],
    Field(discriminator="kind"),
]
