"""
Chooses the transfer strategy for a batch and runs it.
"""

import logging
from typing import List

from .aggregated import AggregatedTransferExecutor
from .chain import SolanaChainClient
from .direct import DirectTransferExecutor
from .errors import AirdropError
from .models import AirdropMethod, AirdropResult, ValidatedRecipient

logger = logging.getLogger(__name__)

DEFAULT_AGGREGATION_THRESHOLD = 10


class AirdropOrchestrator:
    """Runs batches smaller than ``aggregation_threshold`` directly and larger ones through the bulk provider."""

    def __init__(
        self,
        chain: SolanaChainClient,
        direct_executor: DirectTransferExecutor,
        aggregated_executor: AggregatedTransferExecutor,
        aggregation_threshold: int = DEFAULT_AGGREGATION_THRESHOLD,
    ):
        if aggregation_threshold < 1:
            raise ValueError("aggregation_threshold must be >= 1")
        self.chain = chain
        self.direct_executor = direct_executor
        self.aggregated_executor = aggregated_executor
        self.aggregation_threshold = aggregation_threshold

    def select_method(self, recipient_count: int) -> AirdropMethod:
        if recipient_count < self.aggregation_threshold:
            return AirdropMethod.DIRECT
        return AirdropMethod.AGGREGATED

    def run(self, recipients: List[ValidatedRecipient]) -> AirdropResult:
        logger.info(f"Starting airdrop to {len(recipients)} recipients...")

        try:
            sender_account = self.chain.get_or_create_token_account(self.chain.sender_address)
            method = self.select_method(len(recipients))
            logger.info(f"Using {method.value} transfer method")

            if method is AirdropMethod.DIRECT:
                successful, failed = self.direct_executor.execute(recipients, sender_account)
                return AirdropResult(method=method, successful=successful, failed=failed)

            successful, aggregate_tx_ref = self.aggregated_executor.execute(
                recipients,
                self.chain.sender_secret(),
                self.chain.token_mint_address,
            )
            return AirdropResult(method=method, successful=successful, aggregate_tx_ref=aggregate_tx_ref)

        except AirdropError:
            raise
        except Exception as e:
            logger.error(f"Error processing airdrop: {e}")
            raise AirdropError(f"Airdrop failed: {e}") from e
