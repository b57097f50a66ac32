import logging
import struct
from dataclasses import dataclass

from homomorphic_elgamal.errors import ImportFormatError
from homomorphic_elgamal.keys import KeyMaterial, PaddingMode

logger = logging.getLogger(__name__)

_LENGTH = struct.Struct(">I")
_FIELDS = ("p", "g", "y", "x")


def int_to_bytes(value: int) -> bytes:
    """Minimal big-endian encoding; zero becomes a single 0x00 byte."""
    return value.to_bytes(max(1, (value.bit_length() + 7) // 8), byteorder='big')


def bytes_to_int(data: bytes) -> int:
    return int.from_bytes(data, byteorder='big')


@dataclass
class ParameterSet:
    """Serialized key: big-endian P, G, Y, X plus the padding mode.

    A single 0x00 byte in x means the private exponent was withheld.
    """
    p: bytes
    g: bytes
    y: bytes
    x: bytes
    padding: PaddingMode = PaddingMode.ZEROS

    def to_bytes(self) -> bytes:
        out = bytearray()
        for name in _FIELDS:
            value = getattr(self, name)
            out += _LENGTH.pack(len(value))
            out += value
        out.append(int(self.padding))
        return bytes(out)

    @classmethod
    def from_bytes(cls, data: bytes) -> "ParameterSet":
        fields = {}
        offset = 0
        for name in _FIELDS:
            if offset + _LENGTH.size > len(data):
                raise ImportFormatError(f"Truncated parameter set: missing length of {name}")
            (length,) = _LENGTH.unpack_from(data, offset)
            offset += _LENGTH.size
            if offset + length > len(data):
                raise ImportFormatError(f"Truncated parameter set: {name} needs {length} bytes")
            fields[name] = bytes(data[offset:offset + length])
            offset += length

        if offset + 1 != len(data):
            raise ImportFormatError("Parameter set must end with exactly one padding byte")
        try:
            padding = PaddingMode(data[offset])
        except ValueError:
            raise ImportFormatError(f"Unknown padding mode tag: {data[offset]}")
        return cls(padding=padding, **fields)


def export_parameters(key: KeyMaterial, include_private: bool) -> ParameterSet:
    params = ParameterSet(
        p=int_to_bytes(key.p),
        g=int_to_bytes(key.g),
        y=int_to_bytes(key.y),
        # explicit zero placeholder rather than an empty field
        x=int_to_bytes(key.x) if include_private else bytes(1),
        padding=key.padding,
    )
    logger.debug("Exported %d-bit key parameters (private=%s)", key.key_size, include_private)
    return params


def import_parameters(params: ParameterSet) -> KeyMaterial:
    for name in ("p", "g", "y"):
        if not getattr(params, name):
            raise ImportFormatError(f"Parameter {name.upper()} is missing")
    try:
        padding = PaddingMode(params.padding)
    except ValueError:
        raise ImportFormatError(f"Unknown padding mode: {params.padding!r}")

    p = bytes_to_int(params.p)
    g = bytes_to_int(params.g)
    y = bytes_to_int(params.y)
    x = bytes_to_int(params.x) if params.x else 0

    if p < 3:
        raise ImportFormatError("P is too small to be a group modulus")
    if not (0 < g < p and 0 < y < p):
        raise ImportFormatError("G and Y must lie in [1, P)")
    if x and pow(g, x, p) != y:
        raise ImportFormatError("Y does not match G^X mod P")

    logger.info("Imported %d-bit key (private=%s)", p.bit_length(), x != 0)
    return KeyMaterial(p=p, g=g, y=y, x=x, padding=padding)
