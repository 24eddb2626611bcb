from typing import Any, List, Optional

from pydantic import BaseModel, Field

from solairdrop.models import AirdropResult


class AirdropRequest(BaseModel):
    # Any shape is accepted here; validate_recipients reports problems per item.
    recipients: Any = Field(default=None, description="List of {address, amount} objects")


class TransferOutcomeResponse(BaseModel):
    address: str
    amount: float
    success: bool
    signature: Optional[str] = None
    reason: Optional[str] = None


class AirdropResponse(BaseModel):
    successful: List[TransferOutcomeResponse]
    failed: List[TransferOutcomeResponse]
    method: str
    aggregate_tx_ref: Optional[str] = None

    @classmethod
    def from_result(cls, result: AirdropResult) -> "AirdropResponse":
        return cls.model_validate(result.to_dict())


class ErrorResponse(BaseModel):
    error: str


class ValidationErrorsResponse(BaseModel):
    errors: List[str]
