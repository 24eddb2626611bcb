"""Error types raised by the airdrop core."""


class AirdropError(Exception):
    """An airdrop run could not be carried out."""


class ConfigurationError(AirdropError):
    """A required setting (signing key, token mint, provider credential) is missing or malformed."""


class TransferError(AirdropError):
    """A submitted transaction was rejected or failed on chain."""


class AggregateTransferError(AirdropError):
    """The bulk transfer provider failed; the whole batch is considered failed."""


class CsvFormatError(AirdropError):
    """An uploaded recipient file could not be read."""
