"""Application configuration using pydantic-settings.

One settings object serves the HTTP backend and both swap scripts. The
scripts only need the keys for their own direction, so required values are
checked per entrypoint with :meth:`Settings.require`.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Env names that differ from the upper-cased field name
_ENV_NAMES = {
    "inch_api_key": "DEV_PORTAL_API_KEY",
}


class ConfigurationError(RuntimeError):
    """Raised when required environment variables are missing."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            "Missing required environment variable(s): " + ", ".join(missing)
        )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # ======================
    # 1inch Developer Portal
    # ======================
    inch_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("INCH_API_KEY", "DEV_PORTAL_API_KEY", "inch_api_key"),
        description="1inch Developer Portal API key",
    )
    fusion_api_url: str = Field(
        default="https://api.1inch.dev/fusion-plus",
        description="Fusion+ relayer base URL",
    )
    web3_node_url: str = Field(
        default="https://api.1inch.dev/web3",
        description="1inch Web3 node base URL (chain id is appended)",
    )

    # ======================
    # Chain RPC Endpoints
    # ======================
    eth_rpc_url: str = Field(
        default="https://eth.llamarpc.com", description="Ethereum RPC URL"
    )
    sol_rpc_url: str = Field(
        default="https://api.mainnet-beta.solana.com", description="Solana RPC URL"
    )

    # ======================
    # Backend signer
    # ======================
    test_private_key: Optional[str] = Field(default=None, description="EVM key used by /swap endpoints")
    test_maker_address: Optional[str] = Field(default=None, description="EVM maker address for test routes")
    test_receiver_address: Optional[str] = Field(default=None, description="Receiver for test routes")

    # ======================
    # EVM -> Solana script
    # ======================
    private_key: Optional[str] = Field(default=None, description="EVM maker private key")
    maker_address: Optional[str] = Field(default=None, description="EVM maker address")
    receiver_address: Optional[str] = Field(default=None, description="Solana receiver address")

    # ======================
    # Solana -> EVM script
    # ======================
    solana_private_key: Optional[str] = Field(default=None, description="Base58 Solana secret key")
    solana_maker_address: Optional[str] = Field(default=None, description="Solana maker address")
    eth_receiver_address: Optional[str] = Field(default=None, description="EVM receiver address")

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    port: int = Field(default=3001, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug logging")

    # ======================
    # Swap monitoring
    # ======================
    poll_interval: float = Field(default=5.0, gt=0, description="Seconds between relayer polls")
    monitor_timeout: float = Field(default=600.0, gt=0, description="Give up monitoring after N seconds")
    http_timeout: float = Field(default=30.0, gt=0, description="Relayer HTTP timeout in seconds")

    @property
    def has_api_key(self) -> bool:
        return bool(self.inch_api_key)

    def web3_node_for(self, chain_id: int) -> str:
        """1inch Web3 node URL for a chain."""
        return f"{self.web3_node_url.rstrip('/')}/{chain_id}"

    def missing(self, *fields: str) -> list[str]:
        """Return env variable names of unset fields."""
        result = []
        for name in fields:
            if not getattr(self, name):
                result.append(_ENV_NAMES.get(name, name.upper()))
        return result

    def require(self, *fields: str) -> None:
        """Raise ConfigurationError listing every unset field."""
        missing = self.missing(*fields)
        if missing:
            raise ConfigurationError(missing)

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "port": self.port,
            "fusion_api_url": self.fusion_api_url,
            "inch_api_key": self._redact(self.inch_api_key),
            "rpc": {
                "ETH": self.eth_rpc_url,
                "SOL": self.sol_rpc_url,
            },
            "signers": {
                "backend": self._redact(self.test_private_key),
                "evm_to_sol": self._redact(self.private_key),
                "sol_to_evm": self._redact(self.solana_private_key),
            },
            "monitoring": {
                "poll_interval": self.poll_interval,
                "timeout": self.monitor_timeout,
            },
        }

    @staticmethod
    def _redact(value: Optional[str]) -> str:
        return "***" if value else "(not set)"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
