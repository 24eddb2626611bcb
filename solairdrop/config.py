"""
Configuration loaded from environment variables (and a ``.env`` file if present).
"""

import os
from dataclasses import dataclass
from typing import List, Optional, Union

from dotenv import load_dotenv

from .errors import ConfigurationError

DEFAULT_RPC_ENDPOINT = "https://api.devnet.solana.com"


@dataclass
class Settings:
    """Service settings."""
    port: int = 3000
    jwt_secret: Optional[str] = None
    jwt_expires_hours: float = 1.0
    solana_network: str = "devnet"
    rpc_endpoint: str = DEFAULT_RPC_ENDPOINT
    helius_api_key: Optional[str] = None
    bulk_transfer_url: Optional[str] = None
    provider_timeout: float = 60.0
    wallet_private_key: Optional[str] = None
    token_mint_address: Optional[str] = None
    token_decimals: Optional[int] = None
    aggregation_threshold: int = 10
    cors_origins: Union[str, List[str]] = "*"
    rate_limit_points: int = 5
    rate_limit_duration: float = 60.0
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    journal_file: Optional[str] = None


def _int_env(name: str, default: str) -> int:
    value = os.getenv(name, default)
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e


def _float_env(name: str, default: str) -> float:
    value = os.getenv(name, default)
    try:
        return float(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from e


def load_settings(env_path: Optional[str] = None) -> Settings:
    """Build Settings from the environment. Values already in the environment win over ``.env``."""
    load_dotenv(env_path)

    cors_origins = os.getenv("CORS_ORIGINS")
    token_decimals = os.getenv("TOKEN_DECIMALS")

    return Settings(
        port=_int_env("PORT", "3000"),
        jwt_secret=os.getenv("JWT_SECRET"),
        jwt_expires_hours=_float_env("JWT_EXPIRES_HOURS", "1"),
        solana_network=os.getenv("SOLANA_NETWORK", "devnet"),
        rpc_endpoint=os.getenv("RPC_ENDPOINT", DEFAULT_RPC_ENDPOINT),
        helius_api_key=os.getenv("HELIUS_API_KEY"),
        bulk_transfer_url=os.getenv("BULK_TRANSFER_URL"),
        provider_timeout=_float_env("PROVIDER_TIMEOUT", "60"),
        wallet_private_key=os.getenv("WALLET_PRIVATE_KEY"),
        token_mint_address=os.getenv("TOKEN_MINT_ADDRESS"),
        token_decimals=_int_env("TOKEN_DECIMALS", token_decimals) if token_decimals else None,
        aggregation_threshold=_int_env("AGGREGATION_THRESHOLD", "10"),
        cors_origins=[o.strip() for o in cors_origins.split(",")] if cors_origins else "*",
        rate_limit_points=_int_env("RATE_LIMIT_POINTS", "5"),
        rate_limit_duration=_float_env("RATE_LIMIT_DURATION", "60"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_dir=os.getenv("LOG_DIR"),
        journal_file=os.getenv("JOURNAL_FILE"),
    )
