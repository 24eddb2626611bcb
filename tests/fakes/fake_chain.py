"""In-memory stand-ins for the chain client and the bulk transfer provider."""

from typing import List, Optional, Tuple

from solders.pubkey import Pubkey

from solairdrop.chain import is_valid_address


def new_address() -> str:
    return str(Pubkey.new_unique())


class FakeChainClient:
    """Records every transfer instead of talking to an RPC node."""

    def __init__(self, decimals: int = 9, failing_addresses=(), setup_error: Optional[Exception] = None):
        self.sender_address = new_address()
        self.token_mint_address = new_address()
        self.decimals = decimals
        self.failing_addresses = set(failing_addresses)
        self.setup_error = setup_error
        self.transfers: List[Tuple[str, str, int]] = []
        self.confirmed: List[str] = []
        self.attempted: List[str] = []

    def is_valid_address(self, address: str) -> bool:
        return is_valid_address(address)

    def token_decimals(self) -> int:
        return self.decimals

    def sender_secret(self) -> List[int]:
        return [7] * 64

    def get_or_create_token_account(self, owner: str) -> str:
        if owner == self.sender_address and self.setup_error is not None:
            raise self.setup_error
        if owner != self.sender_address:
            self.attempted.append(owner)
        return f"ata-{owner}"

    def transfer(self, source_account: str, destination_account: str, amount_raw: int) -> str:
        owner = destination_account.removeprefix("ata-")
        if owner in self.failing_addresses:
            raise ConnectionError(f"simulated network error for {owner}")
        self.transfers.append((source_account, destination_account, amount_raw))
        return f"sig-{len(self.transfers)}"

    def confirm(self, signature: str) -> None:
        self.confirmed.append(signature)


class FakeBulkProvider:
    def __init__(self, signature: str = "bulk-sig", error: Optional[Exception] = None):
        self.signature = signature
        self.error = error
        self.calls: List[dict] = []

    def airdrop(self, token_mint: str, recipients: List[dict], sender_secret: List[int]) -> str:
        self.calls.append({"token_mint": token_mint, "recipients": recipients, "sender_secret": sender_secret})
        if self.error is not None:
            raise self.error
        return self.signature
