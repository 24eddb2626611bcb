"""
Sanitizes raw recipient input into a list of ValidatedRecipient.

Errors are collected per item instead of aborting the batch so a caller can
report every bad row at once.
"""

import math
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional

from .chain import is_valid_address
from .models import ValidatedRecipient, ValidationResult


def _parse_amount(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            amount = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            amount = float(value.strip())
        except (OverflowError, ValueError):
            return None
    else:
        return None

    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_recipients(
    recipients: Any,
    address_validator: Callable[[str], bool] = is_valid_address,
) -> ValidationResult:
    """Split raw ``{address, amount}`` items into valid recipients and errors.

    Never raises. Valid recipients keep their input order and get a float amount.
    """
    result = ValidationResult()

    if isinstance(recipients, (str, bytes)) or not isinstance(recipients, Sequence):
        result.errors.append("Recipients must be an array")
        return result

    if len(recipients) == 0:
        result.errors.append("Recipients array cannot be empty")
        return result

    for index, recipient in enumerate(recipients):
        if not isinstance(recipient, Mapping):
            result.errors.append(f"Recipient at index {index} missing address or amount")
            continue

        address = recipient.get("address")
        raw_amount = recipient.get("amount")
        if _is_missing(address) or _is_missing(raw_amount):
            result.errors.append(f"Recipient at index {index} missing address or amount")
            continue

        if not isinstance(address, str) or not address_validator(address):
            result.errors.append(f"Invalid Solana address at index {index}: {address}")
            continue

        amount = _parse_amount(raw_amount)
        if amount is None:
            result.errors.append(f"Invalid amount at index {index}: {raw_amount}")
            continue

        result.validated_recipients.append(ValidatedRecipient(address=address, amount=amount))

    return result
