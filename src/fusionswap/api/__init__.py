"""HTTP API for fusionswap."""
