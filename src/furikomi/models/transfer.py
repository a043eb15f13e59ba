"""Transfer request/result models and reference-table records."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class BankEntry(BaseModel):
    """A financial institution from the bank reference table."""

    name: str
    code: str = ""
    kana: str = ""
    hira: str = ""
    roma: str = ""

    model_config = {"frozen": True, "extra": "ignore"}


class BranchEntry(BaseModel):
    """A branch from a per-bank branch reference table."""

    name: str
    code: str = ""
    kana: str = ""
    hira: str = ""
    roma: str = ""

    model_config = {"frozen": True, "extra": "ignore"}


class TransferRequest(BaseModel):
    """Raw transfer fields as received. ``None`` marks an absent field."""

    bank_code: Optional[str] = None
    branch_code: Optional[str] = None
    account_type: Optional[str] = None
    account_number: Optional[str] = None
    account_holder_kana: Optional[str] = None
    amount: int = Field(default=0, ge=0)

    def echo(self) -> dict[str, object]:
        """Normalized echo of the input: trimmed strings, optional defaults applied."""
        return {
            "bank_code": (self.bank_code or "").strip(),
            "branch_code": (self.branch_code or "").strip(),
            "account_type": (self.account_type or "").strip(),
            "account_number": (self.account_number or "").strip(),
            "account_holder_kana": self.account_holder_kana or "",
            "amount": self.amount,
        }


class TransferResult(BaseModel):
    """Normalized Zengin transfer fields."""

    formatted_bank_code: str
    formatted_branch_code: str
    formatted_account_number: str
    account_type_description: str
    formatted_amount: str
    account_holder_kana_normalized: str
    resolved_bank_name: str
    resolved_branch_name: str

    model_config = {"frozen": True}
