"""Tests for the solana-py wrapper, with the RPC client mocked out."""

from unittest.mock import MagicMock

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature
from spl.token.instructions import get_associated_token_address

from solairdrop.chain import SolanaChainClient, is_valid_address
from solairdrop.errors import TransferError


def make_rpc(account_exists=True, status_err=None):
    rpc = MagicMock()
    rpc.get_account_info.return_value.value = object() if account_exists else None
    rpc.get_latest_blockhash.return_value.value.blockhash = Hash.default()
    rpc.send_transaction.return_value.value = Signature.default()
    rpc.confirm_transaction.return_value.value = [MagicMock(err=status_err)]
    rpc.get_token_supply.return_value.value.decimals = 9
    return rpc


def make_client(rpc, token_decimals=None):
    return SolanaChainClient(
        rpc_url="http://localhost:8899",
        payer=Keypair(),
        token_mint=Pubkey.new_unique(),
        token_decimals=token_decimals,
        rpc_client=rpc,
    )


def test_is_valid_address():
    assert is_valid_address(str(Pubkey.new_unique()))
    assert not is_valid_address("not-a-wallet")
    assert not is_valid_address("")


def test_token_decimals_read_once_from_mint():
    rpc = make_rpc()
    client = make_client(rpc)

    assert client.token_decimals() == 9
    assert client.token_decimals() == 9
    rpc.get_token_supply.assert_called_once_with(client.token_mint)


def test_token_decimals_override_skips_rpc():
    rpc = make_rpc()

    assert make_client(rpc, token_decimals=6).token_decimals() == 6
    rpc.get_token_supply.assert_not_called()


def test_existing_token_account_is_returned():
    rpc = make_rpc(account_exists=True)
    client = make_client(rpc)
    owner = Pubkey.new_unique()

    account = client.get_or_create_token_account(str(owner))

    assert account == str(get_associated_token_address(owner, client.token_mint))
    rpc.send_transaction.assert_not_called()


def test_missing_token_account_is_created_and_confirmed():
    rpc = make_rpc(account_exists=False)
    client = make_client(rpc)
    owner = Pubkey.new_unique()

    account = client.get_or_create_token_account(str(owner))

    assert account == str(get_associated_token_address(owner, client.token_mint))
    rpc.send_transaction.assert_called_once()
    rpc.confirm_transaction.assert_called_once()


def test_transfer_returns_signature():
    rpc = make_rpc()
    client = make_client(rpc, token_decimals=6)

    signature = client.transfer(str(Pubkey.new_unique()), str(Pubkey.new_unique()), 1_000_000)

    assert signature == str(Signature.default())
    rpc.send_transaction.assert_called_once()


def test_confirm_raises_on_failed_transaction():
    client = make_client(make_rpc(status_err="InstructionError"))

    with pytest.raises(TransferError, match="failed"):
        client.confirm(str(Signature.default()))


def test_sender_secret_is_64_ints():
    client = make_client(make_rpc())

    secret = client.sender_secret()

    assert len(secret) == 64
    assert all(isinstance(b, int) for b in secret)
