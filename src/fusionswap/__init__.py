"""Cross-chain EVM <-> Solana swaps over 1inch Fusion+."""

__version__ = "0.1.0"
