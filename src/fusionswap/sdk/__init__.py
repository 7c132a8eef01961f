"""Gateway to the 1inch Fusion+ cross-chain API.

Exposes the operations the swap flows rely on: quoting, hash-lock and secret
construction, order building/submission, order monitoring and secret reveal.
"""

from fusionswap.sdk.client import FusionPlusSDK
from fusionswap.sdk.connectors import (
    PrivateKeyProviderConnector,
    SolanaTransactionSender,
    Web3ProviderConnector,
)
from fusionswap.sdk.errors import (
    FusionAPIError,
    FusionSDKError,
    HashLockError,
    InvalidPresetError,
    SignerNotConfiguredError,
    WalletMismatchError,
)
from fusionswap.sdk.hashlock import HashLock
from fusionswap.sdk.models import (
    OrderStatus,
    OrderStatusInfo,
    PreparedOrder,
    PresetEnum,
    Quote,
    QuoteParams,
    ReadyToAcceptSecretFills,
)
from fusionswap.sdk.secret_manager import SecretData, create_secret_data

__all__ = [
    "FusionPlusSDK",
    "PrivateKeyProviderConnector",
    "SolanaTransactionSender",
    "Web3ProviderConnector",
    "FusionAPIError",
    "FusionSDKError",
    "HashLockError",
    "InvalidPresetError",
    "SignerNotConfiguredError",
    "WalletMismatchError",
    "HashLock",
    "OrderStatus",
    "OrderStatusInfo",
    "PreparedOrder",
    "PresetEnum",
    "Quote",
    "QuoteParams",
    "ReadyToAcceptSecretFills",
    "SecretData",
    "create_secret_data",
]
