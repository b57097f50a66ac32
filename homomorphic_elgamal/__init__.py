from homomorphic_elgamal.block_cipher import BlockCipher
from homomorphic_elgamal.elgamal import Capability, ElGamal
from homomorphic_elgamal.errors import (
    ElGamalError,
    GenerationFailure,
    ImportFormatError,
    InvalidCiphertextLength,
    InvalidCiphertextValue,
    InvalidPadding,
    InvalidPlaintextValue,
    MissingPrivateKey,
    UnsupportedOperation,
)
from homomorphic_elgamal.keys import KeyGenerator, KeyMaterial, PaddingMode
from homomorphic_elgamal.multiplier import multiply, multiply_all
from homomorphic_elgamal.parameters import ParameterSet, export_parameters, import_parameters

__all__ = [
    "BlockCipher",
    "Capability",
    "ElGamal",
    "ElGamalError",
    "GenerationFailure",
    "ImportFormatError",
    "InvalidCiphertextLength",
    "InvalidCiphertextValue",
    "InvalidPadding",
    "InvalidPlaintextValue",
    "KeyGenerator",
    "KeyMaterial",
    "MissingPrivateKey",
    "PaddingMode",
    "ParameterSet",
    "UnsupportedOperation",
    "export_parameters",
    "import_parameters",
    "multiply",
    "multiply_all",
]
