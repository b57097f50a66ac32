import threading
import time

import pytest

from homomorphic_elgamal import (
    Capability,
    ElGamal,
    GenerationFailure,
    InvalidPlaintextValue,
    KeyGenerator,
    KeyMaterial,
    MissingPrivateKey,
    PaddingMode,
    UnsupportedOperation,
    export_parameters,
)
from homomorphic_elgamal import elgamal as elgamal_module


class CountingGenerator:
    calls = 0

    def generate(self, key_size, padding=PaddingMode.ZEROS):
        type(self).calls += 1
        time.sleep(0.05)
        return KeyGenerator().generate(key_size, padding)


@pytest.fixture
def counting_generator(monkeypatch):
    CountingGenerator.calls = 0
    monkeypatch.setattr(elgamal_module, "KeyGenerator", CountingGenerator)
    return CountingGenerator


def test_key_is_generated_lazily(counting_generator):
    elgamal = ElGamal(key_size=384)
    assert counting_generator.calls == 0

    first = elgamal.export_parameters(include_private=True)
    second = elgamal.export_parameters(include_private=True)
    assert first == second
    assert counting_generator.calls == 1


def test_encrypt_then_decrypt_use_same_key(counting_generator):
    elgamal = ElGamal(key_size=384)
    message = b"lazy key"
    decrypted = elgamal.decrypt(elgamal.encrypt(message))
    assert decrypted.rstrip(b"\x00") == message
    assert counting_generator.calls == 1


def test_concurrent_first_use_generates_once(counting_generator):
    elgamal = ElGamal(key_size=384)
    barrier = threading.Barrier(8)
    seen = []

    def worker():
        barrier.wait()
        seen.append(elgamal.key_material)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert counting_generator.calls == 1
    assert all(material is seen[0] for material in seen)


def test_invalid_key_size_fails_on_first_use():
    elgamal = ElGamal(key_size=100)
    with pytest.raises(GenerationFailure):
        elgamal.encrypt(b"data")


def test_round_trip_pkcs7():
    elgamal = ElGamal(key_size=384, padding=PaddingMode.PKCS7)
    message = b"The quick brown fox jumps over the lazy dog" * 3
    assert elgamal.decrypt(elgamal.encrypt(message)) == message


def test_homomorphic_multiply(small_elgamal):
    c1 = small_elgamal.encrypt_integer(5, k=3)
    c2 = small_elgamal.encrypt_integer(7)
    assert small_elgamal.decrypt_integer(small_elgamal.multiply(c1, c2)) == 35


def test_multiply_all(small_elgamal):
    blocks = [small_elgamal.encrypt_integer(m) for m in (2, 3, 4)]
    assert small_elgamal.decrypt_integer(small_elgamal.multiply_all(blocks)) == 24


def test_import_resets_key_size(small_elgamal):
    assert small_elgamal.key_size == 9
    assert small_elgamal.key_material.p == 467


def test_import_replaces_padding(key):
    key.padding = PaddingMode.ANSIX923
    elgamal = ElGamal()
    elgamal.import_parameters(export_parameters(key, include_private=True))
    assert elgamal.padding == PaddingMode.ANSIX923


def test_padding_setter(small_elgamal):
    small_elgamal.padding = PaddingMode.PKCS7
    assert small_elgamal.key_material.padding == PaddingMode.PKCS7
    assert small_elgamal.decrypt(small_elgamal.encrypt(b"ab")) == b"ab"


def test_public_only_instance(small_elgamal):
    public = ElGamal()
    public.import_parameters(small_elgamal.export_parameters(include_private=False))

    block = public.encrypt_integer(11)
    assert small_elgamal.decrypt_integer(block) == 11
    with pytest.raises(MissingPrivateKey):
        public.decrypt_integer(block)


def test_sign_is_unsupported(small_elgamal):
    with pytest.raises(UnsupportedOperation):
        small_elgamal.sign(b"hash")
    with pytest.raises(UnsupportedOperation):
        small_elgamal.verify_signature(b"hash", b"signature")


def test_unsupported_operation_is_not_implemented(small_elgamal):
    with pytest.raises(NotImplementedError):
        small_elgamal.sign(b"hash")


def test_capabilities():
    assert ElGamal.supports(Capability.ENCRYPTION)
    assert ElGamal.supports(Capability.HOMOMORPHIC_MULTIPLICATION)
    assert not ElGamal.supports(Capability.SIGNING)


def test_context_manager_clears_private_key(small_elgamal):
    with small_elgamal as elgamal:
        block = elgamal.encrypt_integer(3)
        assert elgamal.decrypt_integer(block) == 3

    material = small_elgamal.key_material
    assert material.x == 0
    assert material.p == 467
    assert small_elgamal.export_parameters(include_private=True).x == b"\x00"


def test_imported_sub_byte_modulus():
    small = ElGamal()
    small.import_parameters(export_parameters(KeyMaterial(p=251, g=2, y=32, x=5), include_private=True))

    assert small.decrypt_integer(small.encrypt_integer(12)) == 12
    with pytest.raises(InvalidPlaintextValue):
        small.encrypt(b"a")
    with pytest.raises(InvalidPlaintextValue):
        small.decrypt(bytes(small.key_material.ciphertext_block_size))
