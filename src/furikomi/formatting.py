"""Pure field transforms for Zengin transfer data.

Every function here is deterministic and free of I/O.
"""

from __future__ import annotations

import jaconv

BANK_CODE_WIDTH = 4
BRANCH_CODE_WIDTH = 3
AMOUNT_WIDTH = 10

UNKNOWN_ACCOUNT_TYPE = "Unknown"

# 預金種目: label -> Zengin account type code
ACCOUNT_TYPE_CODES: dict[str, str] = {
    "普通": "1",  # ordinary / normal
    "当座": "2",  # current
    "貯蓄": "4",  # savings
}


def pad_bank_code(code: str) -> str:
    """Left-pad a bank code with zeros to 4 characters."""
    return code.rjust(BANK_CODE_WIDTH, "0")


def pad_branch_code(code: str) -> str:
    """Left-pad a branch code with zeros to 3 characters."""
    return code.rjust(BRANCH_CODE_WIDTH, "0")


def format_amount(amount: int) -> str:
    """Zero-pad a non-negative amount to 10 digits.

    Amounts wider than the field are emitted in full, not truncated.
    """
    if amount < 0:
        raise ValueError(f"amount must be non-negative, got {amount}")
    return str(amount).rjust(AMOUNT_WIDTH, "0")


def resolve_account_type(account_type: str) -> str:
    """Map an account type label (or its code) to the Zengin code.

    Unrecognized values resolve to ``"Unknown"``.
    """
    value = account_type.strip()
    if value in ACCOUNT_TYPE_CODES:
        return ACCOUNT_TYPE_CODES[value]
    if value in ACCOUNT_TYPE_CODES.values():
        return value
    return UNKNOWN_ACCOUNT_TYPE


def to_hankaku_kana(text: str) -> str:
    """Convert full-width katakana, alphanumerics and spaces to half-width.

    Hiragana, kanji and text that is already half-width are left unchanged,
    so the transform is idempotent.
    """
    converted = jaconv.z2h(text, kana=True, ascii=True, digit=True)
    return converted.replace("　", " ")
