"""
Direct transfer path: one confirmed on-chain transfer per recipient.
"""

import logging
from typing import List, Optional, Tuple

from .chain import SolanaChainClient
from .journal import TransferJournal
from .models import AirdropMethod, RetryPolicy, TransferOutcome, ValidatedRecipient, to_base_units

logger = logging.getLogger(__name__)


class DirectTransferExecutor:
    """Sends to recipients one at a time, recording each failure instead of stopping."""

    def __init__(
        self,
        chain: SolanaChainClient,
        retry_policy: RetryPolicy = RetryPolicy.NONE,
        journal: Optional[TransferJournal] = None,
    ):
        self.chain = chain
        self.retry_policy = retry_policy
        self.journal = journal

    def execute(
        self,
        recipients: List[ValidatedRecipient],
        sender_account: str,
    ) -> Tuple[List[TransferOutcome], List[TransferOutcome]]:
        """Transfer to every recipient sequentially. Returns ``(successful, failed)``."""
        decimals = self.chain.token_decimals()
        successful: List[TransferOutcome] = []
        failed: List[TransferOutcome] = []

        for i, recipient in enumerate(recipients, start=1):
            logger.info(f"Transfer {i}/{len(recipients)}: {recipient.amount:,} tokens to {recipient.address}")

            if not self.chain.is_valid_address(recipient.address):
                outcome = TransferOutcome(
                    address=recipient.address,
                    amount=recipient.amount,
                    success=False,
                    failure_reason="Invalid address",
                )
            else:
                outcome = self._execute_single_transfer(recipient, sender_account, decimals)

            if outcome.success:
                successful.append(outcome)
            else:
                failed.append(outcome)

            if self.journal is not None:
                self.journal.record(outcome, AirdropMethod.DIRECT)

        logger.info(f"Direct transfers completed: {len(successful)} successful, {len(failed)} failed")
        return successful, failed

    def _execute_single_transfer(
        self,
        recipient: ValidatedRecipient,
        sender_account: str,
        decimals: int,
    ) -> TransferOutcome:
        reason = "Transfer not attempted"

        for attempt in range(self.retry_policy.max_attempts):
            try:
                amount_raw = to_base_units(recipient.amount, decimals)
                recipient_account = self.chain.get_or_create_token_account(recipient.address)
                signature = self.chain.transfer(sender_account, recipient_account, amount_raw)
                self.chain.confirm(signature)

                logger.debug(f"Transfer successful to {recipient.address}: {signature}")
                return TransferOutcome(
                    address=recipient.address,
                    amount=recipient.amount,
                    success=True,
                    signature=signature,
                )
            except Exception as e:
                reason = str(e) or type(e).__name__
                logger.error(f"Error sending to {recipient.address} (attempt {attempt + 1}): {reason}")

        return TransferOutcome(
            address=recipient.address,
            amount=recipient.amount,
            success=False,
            failure_reason=reason,
        )
