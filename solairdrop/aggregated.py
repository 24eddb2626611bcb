"""
Aggregated transfer path: the whole batch is handed to a bulk transfer
provider, which compresses it into as few on-chain operations as it likes.
"""

import logging
from typing import List, Optional, Protocol, Tuple

import httpx

from .errors import AggregateTransferError, ConfigurationError
from .journal import TransferJournal
from .models import AirdropMethod, TransferOutcome, ValidatedRecipient

logger = logging.getLogger(__name__)


class BulkTransferProvider(Protocol):
    def airdrop(self, token_mint: str, recipients: List[dict], sender_secret: List[int]) -> str:
        """Send every recipient its amount and return one transaction reference."""


class HttpBulkTransferProvider:
    """Calls a Helius-style bulk airdrop endpoint over HTTP."""

    def __init__(self, api_key: str, endpoint: str, rpc_url: str, timeout: float = 60.0,
                 http_client: Optional[httpx.Client] = None):
        self.api_key = api_key
        self.endpoint = endpoint
        self.rpc_url = rpc_url
        self.http_client = http_client or httpx.Client(timeout=timeout)

    def airdrop(self, token_mint: str, recipients: List[dict], sender_secret: List[int]) -> str:
        response = self.http_client.post(
            self.endpoint,
            params={"api-key": self.api_key},
            json={
                "tokenMint": token_mint,
                "recipients": recipients,
                "senderPrivateKey": sender_secret,
                "rpcUrl": self.rpc_url,
            },
        )
        response.raise_for_status()

        signature = response.json().get("signature")
        if not signature:
            raise AggregateTransferError("Bulk transfer provider returned no signature")
        return signature


class AggregatedTransferExecutor:
    """Delegates a whole batch to a BulkTransferProvider. All recipients succeed or none do."""

    def __init__(self, provider: Optional[BulkTransferProvider], journal: Optional[TransferJournal] = None):
        self.provider = provider
        self.journal = journal

    def execute(
        self,
        recipients: List[ValidatedRecipient],
        sender_secret: List[int],
        token_mint: str,
    ) -> Tuple[List[TransferOutcome], str]:
        """Returns ``(successful, aggregate_tx_ref)`` or raises AggregateTransferError."""
        if self.provider is None:
            raise ConfigurationError("Bulk transfer provider not configured for aggregated airdrops")

        formatted_recipients = [{"address": r.address, "amount": r.amount} for r in recipients]
        logger.info(f"Submitting {len(recipients)} recipients to bulk transfer provider")

        try:
            aggregate_tx_ref = self.provider.airdrop(token_mint, formatted_recipients, sender_secret)
        except AggregateTransferError:
            raise
        except Exception as e:
            logger.error(f"Error in aggregated airdrop: {e}")
            raise AggregateTransferError(f"Aggregated airdrop failed: {e}") from e

        logger.info(f"Aggregated airdrop submitted: {aggregate_tx_ref}")
        successful = [
            TransferOutcome(address=r.address, amount=r.amount, success=True) for r in recipients
        ]

        if self.journal is not None:
            for outcome in successful:
                self.journal.record(outcome, AirdropMethod.AGGREGATED, aggregate_tx_ref)

        return successful, aggregate_tx_ref
