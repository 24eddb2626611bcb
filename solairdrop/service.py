"""
Entry point into the airdrop core, and the factory that builds it from Settings.
"""

import logging
from typing import Any, List, Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .aggregated import AggregatedTransferExecutor, HttpBulkTransferProvider
from .chain import SolanaChainClient
from .config import Settings
from .direct import DirectTransferExecutor
from .errors import ConfigurationError
from .journal import TransferJournal
from .models import AirdropResult, RetryPolicy, ValidatedRecipient, ValidationResult
from .orchestrator import AirdropOrchestrator
from .validator import validate_recipients

logger = logging.getLogger(__name__)


class AirdropService:
    """What the HTTP layer and the CLI talk to."""

    def __init__(self, orchestrator: AirdropOrchestrator):
        self.orchestrator = orchestrator

    def validate_recipients(self, raw: Any) -> ValidationResult:
        return validate_recipients(raw, address_validator=self.orchestrator.chain.is_valid_address)

    def process_airdrop(self, recipients: List[ValidatedRecipient]) -> AirdropResult:
        return self.orchestrator.run(recipients)


def load_keypair(private_key_b58: Optional[str]) -> Keypair:
    if not private_key_b58:
        raise ConfigurationError("Wallet private key not configured")
    try:
        return Keypair.from_base58_string(private_key_b58)
    except Exception as e:
        raise ConfigurationError(f"Invalid private key format: {e}") from e


def load_token_mint(token_mint_str: Optional[str]) -> Pubkey:
    if not token_mint_str:
        raise ConfigurationError("Token mint address not configured")
    try:
        return Pubkey.from_string(token_mint_str)
    except Exception as e:
        raise ConfigurationError(f"Invalid token mint address: {e}") from e


def build_service(settings: Settings) -> AirdropService:
    """Wire chain client, provider, executors and orchestrator from ``settings``."""
    chain = SolanaChainClient(
        rpc_url=settings.rpc_endpoint,
        payer=load_keypair(settings.wallet_private_key),
        token_mint=load_token_mint(settings.token_mint_address),
        token_decimals=settings.token_decimals,
    )

    provider = None
    if settings.helius_api_key:
        if not settings.bulk_transfer_url:
            raise ConfigurationError("BULK_TRANSFER_URL is required when HELIUS_API_KEY is set")
        provider = HttpBulkTransferProvider(
            api_key=settings.helius_api_key,
            endpoint=settings.bulk_transfer_url,
            rpc_url=settings.rpc_endpoint,
            timeout=settings.provider_timeout,
        )
    else:
        logger.warning(f"HELIUS_API_KEY not set; batches of {settings.aggregation_threshold} or more recipients will fail")

    journal = TransferJournal(settings.journal_file) if settings.journal_file else None

    orchestrator = AirdropOrchestrator(
        chain=chain,
        direct_executor=DirectTransferExecutor(chain, retry_policy=RetryPolicy.NONE, journal=journal),
        aggregated_executor=AggregatedTransferExecutor(provider, journal=journal),
        aggregation_threshold=settings.aggregation_threshold,
    )

    logger.info(f"Airdrop service ready on {settings.solana_network} ({settings.rpc_endpoint})")
    logger.info(f"Source Wallet: {chain.sender_address}")
    logger.info(f"Token Mint: {chain.token_mint_address}")
    return AirdropService(orchestrator)
