"""Hash-lock values for Fusion+ orders.

A single-fill order is locked by ``keccak256(secret)``. A multi-fill order is
locked by the root of an ordered Merkle tree over indexed leaves,
``keccak256(uint64 index || keccak256(secret))``; the top 16 bits of that root
carry ``parts - 1`` so resolvers know how many partial fills exist.

The tree matches OpenZeppelin's ``SimpleMerkleTree`` with unsorted leaves:
leaves are stored right-to-left at the end of a flat array and each parent is
the keccak of its two children sorted bytewise.
"""

from typing import Union

from web3 import Web3

from fusionswap.sdk.errors import HashLockError

_ROOT_BITS = 240
_ROOT_MASK = (1 << _ROOT_BITS) - 1

BytesLike = Union[str, bytes]


def _to_bytes32(value: BytesLike) -> bytes:
    if isinstance(value, str):
        value = bytes.fromhex(value[2:] if value.startswith("0x") else value)
    if len(value) != 32:
        raise HashLockError(f"Expected 32 bytes, got {len(value)}")
    return bytes(value)


def hash_secret(secret: BytesLike) -> str:
    """keccak256 of a 32-byte secret as 0x-prefixed hex."""
    return Web3.to_hex(Web3.keccak(_to_bytes32(secret)))


def get_merkle_leaves_from_secret_hashes(secret_hashes: list[BytesLike]) -> list[str]:
    """Indexed leaves built from already-hashed secrets."""
    return [
        Web3.to_hex(Web3.solidity_keccak(["uint64", "bytes32"], [idx, _to_bytes32(h)]))
        for idx, h in enumerate(secret_hashes)
    ]


def get_merkle_leaves(secrets: list[BytesLike]) -> list[str]:
    """Indexed leaves for a list of raw secrets."""
    return get_merkle_leaves_from_secret_hashes([hash_secret(s) for s in secrets])


def _hash_pair(a: bytes, b: bytes) -> bytes:
    return bytes(Web3.keccak(b"".join(sorted((a, b)))))


def merkle_root(leaves: list[BytesLike]) -> bytes:
    """Root of the ordered Merkle tree over ``leaves``."""
    if not leaves:
        raise HashLockError("Cannot build a Merkle tree without leaves")

    nodes = [_to_bytes32(leaf) for leaf in leaves]
    tree: list[bytes] = [b""] * (2 * len(nodes) - 1)
    for i, leaf in enumerate(nodes):
        tree[len(tree) - 1 - i] = leaf
    for i in range(len(tree) - 1 - len(nodes), -1, -1):
        tree[i] = _hash_pair(tree[2 * i + 1], tree[2 * i + 2])
    return tree[0]


class HashLock:
    """32-byte hash lock committed to by an order."""

    def __init__(self, value: BytesLike):
        self.value = _to_bytes32(value)

    @classmethod
    def hash_secret(cls, secret: BytesLike) -> str:
        return hash_secret(secret)

    @classmethod
    def get_merkle_leaves(cls, secrets: list[BytesLike]) -> list[str]:
        return get_merkle_leaves(secrets)

    @classmethod
    def for_single_fill(cls, secret: BytesLike) -> "HashLock":
        """Lock that a single secret reveal unlocks."""
        return cls(hash_secret(secret))

    @classmethod
    def for_multiple_fills(cls, leaves: list[BytesLike]) -> "HashLock":
        """Lock for partial fills, one leaf per fill index.

        Raises:
            HashLockError: fewer than two leaves (use ``for_single_fill``)
        """
        if len(leaves) < 2:
            raise HashLockError(
                "Multiple-fill hash lock needs at least 2 leaves. Use HashLock.for_single_fill"
            )
        root = int.from_bytes(merkle_root(leaves), "big")
        value = (root & _ROOT_MASK) | ((len(leaves) - 1) << _ROOT_BITS)
        return cls(value.to_bytes(32, "big"))

    def get_parts_count(self) -> int:
        """Number of partial-fill parts encoded in a multi-fill lock, minus one."""
        return int.from_bytes(self.value, "big") >> _ROOT_BITS

    def to_hex(self) -> str:
        return Web3.to_hex(self.value)

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"HashLock({self.to_hex()})"

    def __eq__(self, other) -> bool:
        return isinstance(other, HashLock) and other.value == self.value

    def __hash__(self) -> int:
        return hash(self.value)
