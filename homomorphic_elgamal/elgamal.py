import enum
import logging
import threading
from typing import Iterable, Optional

from homomorphic_elgamal import multiplier
from homomorphic_elgamal.block_cipher import BlockCipher
from homomorphic_elgamal.errors import UnsupportedOperation
from homomorphic_elgamal.keys import DEFAULT_KEY_SIZE, KeyGenerator, KeyMaterial, PaddingMode
from homomorphic_elgamal.parameters import ParameterSet, export_parameters, import_parameters

logger = logging.getLogger(__name__)


class Capability(enum.Flag):
    ENCRYPTION = enum.auto()
    HOMOMORPHIC_MULTIPLICATION = enum.auto()
    SIGNING = enum.auto()


class ElGamal:
    """ElGamal encryption with a multiplicative homomorphism.

    The key is generated lazily, exactly once, by the first operation that
    needs it, unless parameters are imported first. Safe to share between
    threads.
    """

    capabilities = Capability.ENCRYPTION | Capability.HOMOMORPHIC_MULTIPLICATION

    def __init__(self, key_size: int = DEFAULT_KEY_SIZE,
                 padding: PaddingMode = PaddingMode.ZEROS):
        self.key_size = key_size
        self._padding = PaddingMode(padding)
        self._material = KeyMaterial(padding=self._padding)
        self._lock = threading.Lock()

    def __enter__(self) -> "ElGamal":
        return self

    def __exit__(self, *exc_info) -> None:
        self.clear()

    @classmethod
    def supports(cls, capability: Capability) -> bool:
        return capability in cls.capabilities

    @property
    def key_material(self) -> KeyMaterial:
        material = self._material
        if material.is_initialized:
            return material
        with self._lock:
            if not self._material.is_initialized:
                self._material = KeyGenerator().generate(self.key_size, self._padding)
            return self._material

    @property
    def padding(self) -> PaddingMode:
        return self._padding

    @padding.setter
    def padding(self, mode: PaddingMode) -> None:
        with self._lock:
            self._padding = PaddingMode(mode)
            self._material.padding = self._padding

    def import_parameters(self, params: ParameterSet) -> None:
        material = import_parameters(params)
        with self._lock:
            self._material = material
            self._padding = material.padding
            self.key_size = material.key_size

    def export_parameters(self, include_private: bool) -> ParameterSet:
        return export_parameters(self.key_material, include_private)

    def encrypt(self, plaintext: bytes) -> bytes:
        return BlockCipher(self.key_material).encrypt(plaintext)

    def decrypt(self, ciphertext: bytes) -> bytes:
        return BlockCipher(self.key_material).decrypt(ciphertext)

    def encrypt_integer(self, m: int, k: Optional[int] = None) -> bytes:
        return BlockCipher(self.key_material).encrypt_integer(m, k)

    def decrypt_integer(self, block: bytes) -> int:
        return BlockCipher(self.key_material).decrypt_integer(block)

    def multiply(self, first: bytes, second: bytes) -> bytes:
        return multiplier.multiply(self.key_material, first, second)

    def multiply_all(self, blocks: Iterable[bytes]) -> bytes:
        return multiplier.multiply_all(self.key_material, blocks)

    def sign(self, hashcode: bytes) -> bytes:
        raise UnsupportedOperation("ElGamal signatures are not supported")

    def verify_signature(self, hashcode: bytes, signature: bytes) -> bool:
        raise UnsupportedOperation("ElGamal signatures are not supported")

    def clear(self) -> None:
        """Drop the private exponent; the public key stays usable."""
        with self._lock:
            self._material.scrub()
        logger.debug("Private exponent cleared")


def demo():
    print("Initializing ElGamal cryptosystem...")
    elgamal = ElGamal(key_size=512, padding=PaddingMode.PKCS7)

    message = b"Hello, World!"
    print(f"\nOriginal message: {message!r}")

    cipher = elgamal.encrypt(message)
    print(f"\nEncrypted ({len(cipher)} bytes): {cipher.hex()[:64]}...")

    decrypted = elgamal.decrypt(cipher)
    print(f"\nDecrypted message: {decrypted!r}")
    assert decrypted == message, "Decryption failed!"

    # Homomorphic multiplication on single blocks
    m1, m2 = 30, 12
    c1 = elgamal.encrypt_integer(m1)
    c2 = elgamal.encrypt_integer(m2)
    product = elgamal.decrypt_integer(elgamal.multiply(c1, c2))
    print(f"\nHomomorphic multiplication: {m1} * {m2} = {product}")
    assert product == m1 * m2, "Homomorphic multiplication failed!"

    public = ElGamal()
    public.import_parameters(elgamal.export_parameters(include_private=False))
    c3 = public.encrypt_integer(7)
    tripled = elgamal.decrypt_integer(elgamal.multiply_all([c1, c2, c3]))
    print(f"\nChained with a ciphertext from the public key: {m1} * {m2} * 7 = {tripled}")

    print("\nVerification: Success!")


if __name__ == "__main__":
    demo()
