import enum
import logging
import secrets
from dataclasses import dataclass

import sympy

from homomorphic_elgamal.errors import GenerationFailure

logger = logging.getLogger(__name__)

DEFAULT_KEY_SIZE = 1024
LEGAL_KEY_SIZES = range(384, 1089, 8)


class PaddingMode(enum.IntEnum):
    """How the final partial plaintext block is filled before encryption.

    ZEROS is lossy: trailing zero bytes of the plaintext cannot be told apart
    from padding, so decryption returns the padded length and the caller has
    to remember the original one. The other modes record the pad length in
    the last byte and are stripped on decryption.
    """
    ZEROS = 1
    ANSIX923 = 2
    PKCS7 = 3
    ISO10126 = 4


@dataclass
class KeyMaterial:
    """Group prime, base, public value and private exponent of one key.

    All numeric fields are zero until the key is generated or imported.
    x is zero when only the public half is held.
    """
    p: int = 0
    g: int = 0
    y: int = 0
    x: int = 0
    padding: PaddingMode = PaddingMode.ZEROS

    @property
    def is_initialized(self) -> bool:
        return not (self.p == 0 and self.g == 0 and self.y == 0)

    @property
    def has_private_key(self) -> bool:
        return self.x != 0

    @property
    def key_size(self) -> int:
        return self.p.bit_length()

    @property
    def byte_length(self) -> int:
        return (self.p.bit_length() + 7) // 8

    @property
    def plaintext_block_size(self) -> int:
        # one bit short of P so every block encodes to an integer below P
        return (self.p.bit_length() - 1) // 8

    @property
    def ciphertext_block_size(self) -> int:
        return 2 * self.byte_length

    def scrub(self) -> None:
        """Forget the private exponent."""
        self.x = 0

    def __repr__(self) -> str:
        return "KeyMaterial(bits={}, private={}, padding={})".format(
            self.key_size, self.has_private_key, self.padding.name)


def _random_bits(bits: int) -> int:
    # top bit forced so the value has exactly `bits` bits
    return secrets.randbits(bits) | (1 << (bits - 1))


class KeyGenerator:
    def generate(self, key_size: int = DEFAULT_KEY_SIZE,
                 padding: PaddingMode = PaddingMode.ZEROS) -> KeyMaterial:
        """Generate a fresh key pair with a key_size-bit prime modulus."""
        if key_size not in LEGAL_KEY_SIZES:
            raise GenerationFailure(
                f"Key size {key_size} is not supported; expected "
                f"{LEGAL_KEY_SIZES.start}-{LEGAL_KEY_SIZES.stop - 1} bits "
                f"in steps of {LEGAL_KEY_SIZES.step}")

        try:
            p = sympy.randprime(2**(key_size - 1), 2**key_size)
        except (ValueError, ArithmeticError) as e:
            raise GenerationFailure(f"Failed to generate a {key_size}-bit prime: {e}") from e
        if p is None:
            raise GenerationFailure(f"No {key_size}-bit prime found")

        # X and G are both one bit shorter than P, hence smaller than P.
        # G is not checked to generate a large subgroup.
        x = _random_bits(key_size - 1)
        g = _random_bits(key_size - 1)
        y = pow(g, x, p)

        logger.info("Generated %d-bit ElGamal key", key_size)
        return KeyMaterial(p=p, g=g, y=y, x=x, padding=padding)
