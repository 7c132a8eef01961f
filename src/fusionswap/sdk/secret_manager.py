"""Secret generation for hash-locked orders."""

import secrets
from dataclasses import dataclass

from fusionswap.sdk.errors import HashLockError
from fusionswap.sdk.hashlock import HashLock, get_merkle_leaves, hash_secret


@dataclass
class SecretData:
    """Secrets for one order together with their public commitments.

    ``secrets[i]`` unlocks fill index ``i``; keep them private until the
    relayer reports that index as ready.
    """

    secrets: list[str]
    secret_hashes: list[str]
    hash_lock: HashLock

    def __repr__(self) -> str:
        return (
            f"SecretData(count={len(self.secrets)}, hash_lock={self.hash_lock}, "
            f"secret_hashes={self.secret_hashes})"
        )


def generate_secret() -> str:
    """Return 32 random bytes as 0x-prefixed hex."""
    return "0x" + secrets.token_hex(32)


def generate_secrets(count: int) -> list[str]:
    if count < 1:
        raise HashLockError(f"Secrets count must be at least 1, got {count}")
    return [generate_secret() for _ in range(count)]


def create_hash_lock(secrets_: list[str]) -> HashLock:
    """Single-fill lock for one secret, Merkle lock otherwise."""
    if not secrets_:
        raise HashLockError("At least one secret is required")
    if len(secrets_) == 1:
        return HashLock.for_single_fill(secrets_[0])
    return HashLock.for_multiple_fills(get_merkle_leaves(secrets_))


def create_secret_data(secrets_count: int) -> SecretData:
    secrets_ = generate_secrets(secrets_count)
    return SecretData(
        secrets=secrets_,
        secret_hashes=[hash_secret(s) for s in secrets_],
        hash_lock=create_hash_lock(secrets_),
    )
