class ElGamalError(Exception):
    """Base class for every error raised by this package."""


class InvalidCiphertextLength(ElGamalError, ValueError):
    """Ciphertext is not a whole number of blocks (or not exactly one block)."""


class InvalidCiphertextValue(ElGamalError, ValueError):
    """A ciphertext half is not an element of Z_p."""


class InvalidPlaintextValue(ElGamalError, ValueError):
    """Plaintext integer does not fit below P or in a plaintext block."""


class InvalidPadding(ElGamalError, ValueError):
    pass


class MissingPrivateKey(ElGamalError):
    pass


class UnsupportedOperation(ElGamalError, NotImplementedError):
    pass


class GenerationFailure(ElGamalError):
    """Prime or random generation failed, or the key size is not legal."""


class ImportFormatError(ElGamalError, ValueError):
    """A ParameterSet is malformed or describes an inconsistent key."""
