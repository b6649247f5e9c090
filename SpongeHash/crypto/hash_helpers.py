import os, sys, base64


PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from keccak_sponge_cli import REFLECT, get_variant

DEFAULT_ALGORITHM = os.getenv("SPONGE_ALGO", "sha3-256")
DEFAULT_OUTPUT_BITS = int(os.getenv("SPONGE_OUTPUT_BITS", "256"))
DEFAULT_ENCODING = os.getenv("SPONGE_ENCODING", "le")
ENCODINGS = ("le", "be")

def string_to_encoding(text: str) -> bytes:
    return text.encode("utf-8")

def flip_ordering(data: bytes) -> bytes:
    """Reverse the bit order inside every byte."""
    return bytes(data).translate(REFLECT)

def le_encoding(text: str) -> bytes:
    return string_to_encoding(text)

def be_encoding(text: str) -> bytes:
    return flip_ordering(string_to_encoding(text))

def encode_text(text: str, encoding: str = DEFAULT_ENCODING) -> bytes:
    if encoding == "le":
        return le_encoding(text)
    if encoding == "be":
        return be_encoding(text)
    raise ValueError(f"encoding must be one of {ENCODINGS}, got {encoding!r}")

def print_bytes_be(data: bytes) -> str:
    """Lowercase hex with a space every 4 bytes: b"\\x01\\x02\\x03\\x04\\x05" -> "01020304 05"."""
    raw = bytes(data).hex()
    return " ".join(raw[i:i+8] for i in range(0, len(raw), 8))

def print_bytes_le(data: bytes) -> str:
    return print_bytes_be(flip_ordering(data))

def printer_for(encoding: str):
    # be mode shows bytes in the same reflected bit order its input was fed in
    if encoding not in ENCODINGS:
        raise ValueError(f"encoding must be one of {ENCODINGS}, got {encoding!r}")
    return print_bytes_le if encoding == "be" else print_bytes_be

def hash_bytes(data: bytes, algorithm: str = DEFAULT_ALGORITHM,
               output_bits: int | None = None, encoding: str = "le",
               trace: bool = False) -> dict:
    """Hash ``data`` into an envelope.

    ``digest_hex`` / ``digest_grouped`` are always the digest bytes as produced.
    ``input_display`` / ``digest_display`` follow ``encoding``: in ``be`` mode
    they are bit-reflected, matching how the input was fed in.
    """
    variant = get_variant(algorithm)
    if variant.xof and output_bits is None:
        output_bits = DEFAULT_OUTPUT_BITS
    show = printer_for(encoding)
    digest = variant.digest(data, output_bits, trace=trace)

    return {
        "algorithm": variant.name,
        "standard": variant.standard,
        "output_bits": variant.output_bits if not variant.xof else output_bits,
        "input_display": show(data),
        "digest_hex": digest.hex(),
        "digest_grouped": print_bytes_be(digest),
        "digest_display": show(digest),
    }

def hash_text(text: str, algorithm: str = DEFAULT_ALGORITHM,
              encoding: str = DEFAULT_ENCODING, output_bits: int | None = None) -> dict:
    """Encode ``text`` and hash it; the envelope also records the encoding."""
    env = hash_bytes(encode_text(text, encoding), algorithm, output_bits, encoding=encoding)
    env["encoding"] = encoding
    return env

def hash_b64(data_b64: str, algorithm: str = DEFAULT_ALGORITHM,
             output_bits: int | None = None) -> dict:
    data = base64.b64decode(data_b64, validate=True)
    return hash_bytes(data, algorithm, output_bits)
