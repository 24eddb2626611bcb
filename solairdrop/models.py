"""
Data model shared by the validator, the executors and the orchestrator.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import List, Optional


class AirdropMethod(str, Enum):
    """Transfer strategy used for a run."""
    DIRECT = "direct"
    AGGREGATED = "aggregated"


class RetryPolicy(Enum):
    """How many times a single transfer may be attempted."""
    NONE = "none"

    @property
    def max_attempts(self) -> int:
        return 1


@dataclass(frozen=True)
class ValidatedRecipient:
    """A recipient whose address parsed and whose amount is a positive finite number."""
    address: str
    amount: float


@dataclass
class ValidationResult:
    """Partition of a raw recipient list into valid recipients and per-item errors."""
    validated_recipients: List[ValidatedRecipient] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class TransferOutcome:
    """Result of sending tokens to one recipient."""
    address: str
    amount: float
    success: bool
    signature: Optional[str] = None
    failure_reason: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"address": self.address, "amount": self.amount, "success": self.success}
        if self.signature is not None:
            data["signature"] = self.signature
        if self.failure_reason is not None:
            data["reason"] = self.failure_reason
        return data


@dataclass
class AirdropResult:
    """Combined result of one airdrop run."""
    method: AirdropMethod
    successful: List[TransferOutcome] = field(default_factory=list)
    failed: List[TransferOutcome] = field(default_factory=list)
    aggregate_tx_ref: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "successful": [o.to_dict() for o in self.successful],
            "failed": [o.to_dict() for o in self.failed],
            "method": self.method.value,
        }
        if self.aggregate_tx_ref is not None:
            data["aggregate_tx_ref"] = self.aggregate_tx_ref
        return data


def to_base_units(amount: float, decimals: int) -> int:
    """Convert a UI token amount to the mint's smallest unit, rounding half up.

    ``str(amount)`` is used so that e.g. ``0.1`` converts to exactly
    ``100000000`` at 9 decimals instead of picking up float noise.
    """
    raw = (Decimal(str(amount)).scaleb(decimals)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    if raw <= 0:
        raise ValueError(f"Amount {amount} is below the smallest unit of a {decimals}-decimal token")
    return int(raw)
