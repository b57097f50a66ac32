import secrets

from homomorphic_elgamal.errors import InvalidPadding
from homomorphic_elgamal.keys import PaddingMode

# the reversible modes store the pad length in a single byte
MAX_COUNTED_BLOCK = 255


def pad(data: bytes, block_size: int, mode: PaddingMode) -> bytes:
    """Extend data to a whole number of block_size blocks."""
    if mode == PaddingMode.ZEROS:
        remainder = len(data) % block_size
        if remainder == 0:
            return bytes(data)
        return bytes(data) + bytes(block_size - remainder)

    if block_size > MAX_COUNTED_BLOCK:
        raise InvalidPadding(
            f"{mode.name} padding supports blocks up to {MAX_COUNTED_BLOCK} bytes, "
            f"got {block_size}")

    n = block_size - len(data) % block_size
    if mode == PaddingMode.PKCS7:
        filler = bytes([n]) * (n - 1)
    elif mode == PaddingMode.ANSIX923:
        filler = bytes(n - 1)
    elif mode == PaddingMode.ISO10126:
        filler = secrets.token_bytes(n - 1)
    else:
        raise InvalidPadding(f"Unknown padding mode: {mode!r}")
    return bytes(data) + filler + bytes([n])


def unpad(data: bytes, block_size: int, mode: PaddingMode) -> bytes:
    """Strip the padding added by pad(); ZEROS padding is left in place."""
    if mode == PaddingMode.ZEROS:
        return bytes(data)
    if not data:
        raise InvalidPadding("Padded data is empty")

    n = data[-1]
    if not 1 <= n <= min(block_size, len(data)):
        raise InvalidPadding(f"Pad length {n} out of range")

    filler = data[-n:-1]
    if mode == PaddingMode.PKCS7 and any(b != n for b in filler):
        raise InvalidPadding("Malformed PKCS7 padding")
    if mode == PaddingMode.ANSIX923 and any(filler):
        raise InvalidPadding("Malformed ANSI X9.23 padding")
    return bytes(data[:-n])
