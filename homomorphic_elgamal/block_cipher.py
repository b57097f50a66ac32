import logging
import secrets
from typing import Optional, Tuple

from homomorphic_elgamal.errors import (
    InvalidCiphertextLength,
    InvalidCiphertextValue,
    InvalidPlaintextValue,
    MissingPrivateKey,
)
from homomorphic_elgamal.keys import KeyMaterial
from homomorphic_elgamal.padding import pad, unpad

logger = logging.getLogger(__name__)


def split_block(key: KeyMaterial, block: bytes) -> Tuple[int, int]:
    """Read the (A, B) halves of one ciphertext block."""
    half = key.byte_length
    return (int.from_bytes(block[:half], byteorder='big'),
            int.from_bytes(block[half:2 * half], byteorder='big'))


def join_block(key: KeyMaterial, a: int, b: int) -> bytes:
    """Write (A, B) as two big-endian fields, each left-padded to byte_length(P)."""
    half = key.byte_length
    return a.to_bytes(half, byteorder='big') + b.to_bytes(half, byteorder='big')


class BlockCipher:
    """ElGamal over fixed-size blocks for a single key.

    Plaintext is cut into blocks of plaintext_block_size bytes, each read as
    a big-endian integer M < P and encrypted with its own ephemeral k into
    A = G^k mod P, B = M * Y^k mod P.
    """

    def __init__(self, key: KeyMaterial):
        self.key = key

    def _ephemeral(self) -> int:
        return secrets.randbelow(self.key.p - 2) + 1

    def encrypt_integer(self, m: int, k: Optional[int] = None) -> bytes:
        p = self.key.p
        if not 0 <= m < p:
            raise InvalidPlaintextValue("Plaintext value must lie in [0, P)")

        if k is None:
            k = self._ephemeral()
        elif not 1 <= k < p - 1:
            raise ValueError("Ephemeral exponent must lie in [1, P-1)")

        a = pow(self.key.g, k, p)
        b = (m * pow(self.key.y, k, p)) % p
        return join_block(self.key, a, b)

    def decrypt_integer(self, block: bytes) -> int:
        if len(block) != self.key.ciphertext_block_size:
            raise InvalidCiphertextLength(
                f"Ciphertext block must be {self.key.ciphertext_block_size} bytes, "
                f"got {len(block)}")
        x = self.key.x
        if not x:
            raise MissingPrivateKey("Decryption requires the private exponent")

        p = self.key.p
        a, b = split_block(self.key, block)
        if not (0 < a < p and b < p):
            raise InvalidCiphertextValue("Invalid ciphertext")

        s = pow(a, x, p)
        s_inv = pow(s, -1, p)
        return (b * s_inv) % p

    def _byte_block_size(self) -> int:
        size = self.key.plaintext_block_size
        if size == 0:
            raise InvalidPlaintextValue(
                f"A {self.key.key_size}-bit modulus cannot hold a whole plaintext byte; "
                "use encrypt_integer and decrypt_integer")
        return size

    def encrypt(self, data: bytes) -> bytes:
        size = self._byte_block_size()
        padded = pad(data, size, self.key.padding)

        out = bytearray()
        for i in range(0, len(padded), size):
            m = int.from_bytes(padded[i:i + size], byteorder='big')
            out += self.encrypt_integer(m)
        logger.debug("Encrypted %d plaintext bytes into %d blocks", len(data), len(padded) // size)
        return bytes(out)

    def decrypt(self, data: bytes) -> bytes:
        block_len = self.key.ciphertext_block_size
        if len(data) % block_len != 0:
            raise InvalidCiphertextLength(
                f"Ciphertext length {len(data)} is not a multiple of the "
                f"{block_len}-byte block size")

        size = self._byte_block_size()
        out = bytearray()
        for i in range(0, len(data), block_len):
            m = self.decrypt_integer(data[i:i + block_len])
            try:
                out += m.to_bytes(size, byteorder='big')
            except OverflowError:
                raise InvalidPlaintextValue(
                    f"Decrypted value does not fit in a {size}-byte block; "
                    "use decrypt_integer for product ciphertexts")
        logger.debug("Decrypted %d blocks", len(data) // block_len)
        return unpad(bytes(out), size, self.key.padding)
