"""
Multiplicative homomorphism of ElGamal.

For two ciphertexts of the same key, (A1, B1) = (g^k1, m1*y^k1) and
(A2, B2) = (g^k2, m2*y^k2), the componentwise product

    (A1*A2, B1*B2) = (g^(k1+k2), m1*m2 * y^(k1+k2))

is an ordinary ciphertext of m1*m2 mod p under the ephemeral k1+k2, so it
decrypts with the same private key and can be multiplied again.
"""
from functools import reduce
from typing import Iterable

from homomorphic_elgamal.block_cipher import join_block, split_block
from homomorphic_elgamal.errors import InvalidCiphertextLength
from homomorphic_elgamal.keys import KeyMaterial


def multiply(key: KeyMaterial, first: bytes, second: bytes) -> bytes:
    """Combine two single-block ciphertexts into one of the product plaintext."""
    block_len = key.ciphertext_block_size
    for name, block in (("first", first), ("second", second)):
        if len(block) != block_len:
            raise InvalidCiphertextLength(
                f"Ciphertext {name} must be exactly one {block_len}-byte block, "
                f"got {len(block)} bytes")

    a1, b1 = split_block(key, first)
    a2, b2 = split_block(key, second)
    return join_block(key, (a1 * a2) % key.p, (b1 * b2) % key.p)


def multiply_all(key: KeyMaterial, blocks: Iterable[bytes]) -> bytes:
    blocks = list(blocks)
    if not blocks:
        raise ValueError("Need at least one ciphertext block")
    return reduce(lambda acc, block: multiply(key, acc, block), blocks[1:],
                  _checked(key, blocks[0]))


def _checked(key: KeyMaterial, block: bytes) -> bytes:
    if len(block) != key.ciphertext_block_size:
        raise InvalidCiphertextLength(
            f"Ciphertext must be exactly one {key.ciphertext_block_size}-byte block, "
            f"got {len(block)} bytes")
    return bytes(block)
