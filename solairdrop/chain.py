"""
Thin wrapper over solana-py for the handful of chain operations an airdrop needs.
"""

import logging
from typing import List, Optional

from solana.rpc.api import Client
from solana.rpc.commitment import Commitment, Confirmed
from solana.rpc.types import TxOpts
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import (
    TransferCheckedParams,
    create_associated_token_account,
    get_associated_token_address,
    transfer_checked,
)

from .errors import TransferError

logger = logging.getLogger(__name__)


def is_valid_address(address: str) -> bool:
    """Syntactic check that ``address`` is a base58 Solana public key."""
    try:
        Pubkey.from_string(address)
        return True
    except Exception:
        return False


class SolanaChainClient:
    """Resolves token accounts and submits SPL transfers on behalf of one payer and one mint."""

    def __init__(
        self,
        rpc_url: str,
        payer: Keypair,
        token_mint: Pubkey,
        token_decimals: Optional[int] = None,
        commitment: Commitment = Confirmed,
        rpc_client: Optional[Client] = None,
    ):
        self.rpc_url = rpc_url
        self.payer = payer
        self.token_mint = token_mint
        self.commitment = commitment
        self.rpc_client = rpc_client or Client(rpc_url, commitment=commitment)
        self._token_decimals = token_decimals

    @property
    def sender_address(self) -> str:
        return str(self.payer.pubkey())

    @property
    def token_mint_address(self) -> str:
        return str(self.token_mint)

    def sender_secret(self) -> List[int]:
        """The payer's 64-byte secret key as a list of ints."""
        return list(bytes(self.payer))

    @staticmethod
    def is_valid_address(address: str) -> bool:
        return is_valid_address(address)

    def token_decimals(self) -> int:
        """Decimals declared by the mint, read once and cached."""
        if self._token_decimals is None:
            supply = self.rpc_client.get_token_supply(self.token_mint)
            self._token_decimals = supply.value.decimals
            logger.info(f"Token mint {self.token_mint} declares {self._token_decimals} decimals")
        return self._token_decimals

    def get_or_create_token_account(self, owner: str) -> str:
        """Return the owner's associated token account, creating it if it does not exist yet."""
        owner_pubkey = Pubkey.from_string(owner)
        token_account = get_associated_token_address(owner_pubkey, self.token_mint)

        account_info = self.rpc_client.get_account_info(token_account)
        if account_info.value is not None:
            logger.debug(f"Token account exists for {owner}")
            return str(token_account)

        logger.info(f"Creating token account for {owner}")
        create_account_ix = create_associated_token_account(
            payer=self.payer.pubkey(),
            owner=owner_pubkey,
            mint=self.token_mint,
        )
        signature = self._send([create_account_ix])
        self.confirm(signature)
        return str(token_account)

    def transfer(self, source_account: str, destination_account: str, amount_raw: int) -> str:
        """Submit one transfer_checked instruction and return its signature without waiting."""
        transfer_ix = transfer_checked(
            TransferCheckedParams(
                program_id=TOKEN_PROGRAM_ID,
                source=Pubkey.from_string(source_account),
                mint=self.token_mint,
                dest=Pubkey.from_string(destination_account),
                owner=self.payer.pubkey(),
                amount=amount_raw,
                decimals=self.token_decimals(),
            )
        )
        return self._send([transfer_ix])

    def confirm(self, signature: str) -> None:
        """Block until ``signature`` reaches the client's commitment; raise TransferError if it failed."""
        resp = self.rpc_client.confirm_transaction(
            Signature.from_string(signature),
            commitment=self.commitment,
        )
        status = resp.value[0] if resp.value else None
        if status is not None and status.err is not None:
            raise TransferError(f"Transaction {signature} failed: {status.err}")

    def _send(self, instructions: List[Instruction]) -> str:
        recent_blockhash = self.rpc_client.get_latest_blockhash().value.blockhash
        transaction = Transaction.new_signed_with_payer(
            instructions,
            self.payer.pubkey(),
            [self.payer],
            recent_blockhash,
        )
        result = self.rpc_client.send_transaction(
            transaction,
            opts=TxOpts(skip_confirmation=True, skip_preflight=False, preflight_commitment=self.commitment),
        )
        return str(result.value)
