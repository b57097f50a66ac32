import pytest

from homomorphic_elgamal import ElGamal, KeyGenerator, KeyMaterial, PaddingMode, export_parameters

# textbook group: 467 is prime, 2^127 mod 467 == 132
SMALL_P = 467
SMALL_G = 2
SMALL_X = 127
SMALL_Y = 132


@pytest.fixture
def small_key():
    return KeyMaterial(p=SMALL_P, g=SMALL_G, y=SMALL_Y, x=SMALL_X)


@pytest.fixture
def small_elgamal(small_key):
    elgamal = ElGamal()
    elgamal.import_parameters(export_parameters(small_key, include_private=True))
    return elgamal


@pytest.fixture(scope="session")
def generated_key():
    return KeyGenerator().generate(384)


@pytest.fixture
def key(generated_key):
    # fresh copy so tests may change padding or scrub freely
    return KeyMaterial(p=generated_key.p, g=generated_key.g, y=generated_key.y,
                       x=generated_key.x, padding=PaddingMode.ZEROS)
