"""
Solana token airdrop service.

Distributes an SPL token to a list of recipients, either with one on-chain
transfer per recipient or through a bulk (compressed) transfer provider.
"""

from .errors import (
    AggregateTransferError,
    AirdropError,
    ConfigurationError,
    CsvFormatError,
    TransferError,
)
from .models import (
    AirdropMethod,
    AirdropResult,
    RetryPolicy,
    TransferOutcome,
    ValidatedRecipient,
    ValidationResult,
)
from .orchestrator import AirdropOrchestrator
from .service import AirdropService, build_service
from .validator import validate_recipients

__all__ = [
    "AggregateTransferError",
    "AirdropError",
    "AirdropMethod",
    "AirdropOrchestrator",
    "AirdropResult",
    "AirdropService",
    "ConfigurationError",
    "CsvFormatError",
    "RetryPolicy",
    "TransferError",
    "TransferOutcome",
    "ValidatedRecipient",
    "ValidationResult",
    "build_service",
    "validate_recipients",
]
