"""Tests for settings loading and service wiring."""

import os

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from solairdrop.aggregated import HttpBulkTransferProvider
from solairdrop.config import DEFAULT_RPC_ENDPOINT, Settings, load_settings
from solairdrop.errors import ConfigurationError
from solairdrop.service import build_service

ENV_VARS = [
    "PORT", "JWT_SECRET", "RPC_ENDPOINT", "HELIUS_API_KEY", "BULK_TRANSFER_URL", "WALLET_PRIVATE_KEY",
    "TOKEN_MINT_ADDRESS", "TOKEN_DECIMALS", "AGGREGATION_THRESHOLD", "CORS_ORIGINS", "RATE_LIMIT_POINTS",
    "RATE_LIMIT_DURATION", "JOURNAL_FILE",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return str(tmp_path / ".env")


class TestLoadSettings:
    def test_defaults(self, clean_env):
        settings = load_settings(clean_env)

        assert settings.port == 3000
        assert settings.rpc_endpoint == DEFAULT_RPC_ENDPOINT
        assert settings.aggregation_threshold == 10
        assert settings.token_decimals is None
        assert settings.cors_origins == "*"
        assert settings.rate_limit_points == 5
        assert settings.rate_limit_duration == 60.0

    def test_reads_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("TOKEN_DECIMALS", "6")
        monkeypatch.setenv("AGGREGATION_THRESHOLD", "25")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

        settings = load_settings(clean_env)

        assert settings.port == 8080
        assert settings.token_decimals == 6
        assert settings.aggregation_threshold == 25
        assert settings.cors_origins == ["https://a.example", "https://b.example"]

    def test_reads_dotenv_file(self, clean_env, monkeypatch):
        with open(clean_env, "w") as f:
            f.write("JWT_SECRET=from-file\n")

        try:
            assert load_settings(clean_env).jwt_secret == "from-file"
        finally:
            os.environ.pop("JWT_SECRET", None)

    def test_bad_number(self, clean_env, monkeypatch):
        monkeypatch.setenv("AGGREGATION_THRESHOLD", "ten")

        with pytest.raises(ConfigurationError, match="AGGREGATION_THRESHOLD"):
            load_settings(clean_env)


class TestBuildService:
    def settings(self, **overrides):
        values = {
            "wallet_private_key": str(Keypair()),
            "token_mint_address": str(Pubkey.new_unique()),
            "token_decimals": 6,
        }
        values.update(overrides)
        return Settings(**values)

    def test_missing_private_key(self):
        with pytest.raises(ConfigurationError, match="private key not configured"):
            build_service(self.settings(wallet_private_key=None))

    def test_malformed_private_key(self):
        with pytest.raises(ConfigurationError, match="Invalid private key"):
            build_service(self.settings(wallet_private_key="nope"))

    def test_missing_token_mint(self):
        with pytest.raises(ConfigurationError, match="Token mint"):
            build_service(self.settings(token_mint_address=None))

    def test_api_key_without_url(self):
        with pytest.raises(ConfigurationError, match="BULK_TRANSFER_URL"):
            build_service(self.settings(helius_api_key="key"))

    def test_wires_orchestrator(self, tmp_path):
        settings = self.settings(
            helius_api_key="key",
            bulk_transfer_url="https://bulk.example",
            aggregation_threshold=4,
            journal_file=str(tmp_path / "journal.jsonl"),
        )

        service = build_service(settings)

        orchestrator = service.orchestrator
        assert orchestrator.aggregation_threshold == 4
        assert isinstance(orchestrator.aggregated_executor.provider, HttpBulkTransferProvider)
        assert orchestrator.direct_executor.journal is orchestrator.aggregated_executor.journal
        assert orchestrator.chain.token_decimals() == 6

    def test_without_api_key_provider_is_absent(self):
        service = build_service(self.settings())

        assert service.orchestrator.aggregated_executor.provider is None
