# keccak_sponge_cli.py
# Keccak-f[1600] core + sponge construction (SHA3 / SHAKE) + command line front end
from __future__ import annotations
import argparse, binascii, sys
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union
import numpy as np

ROUNDS = 24
LANE_BITS = 64
STATE_WORDS = 25
MAX_SUFFIX_BITS = 6

Bits = Union[str, Sequence[int], Sequence[bool]]

def mod(value: int, modulus: int) -> int:
    return value % modulus

# ---------------------------------------------------------------------------
# State cube
#
# A lane is a 64-bit word. Bit index z addresses integer bit position 63 - z,
# i.e. z = 0 is the most significant bit. Everything below that touches single
# bits goes through lane_get_bit / lane_set_bit.
# ---------------------------------------------------------------------------

def lane_get_bit(lane: int, z: int) -> int:
    return (int(lane) >> (LANE_BITS - 1 - mod(z, LANE_BITS))) & 1

def lane_set_bit(lane: int, z: int, bit: int) -> int:
    lane = int(lane)
    if lane_get_bit(lane, z) == (1 if bit else 0):
        return lane
    return lane ^ (1 << (LANE_BITS - 1 - mod(z, LANE_BITS)))

def get_bit(state: np.ndarray, x: int, y: int, z: int) -> int:
    return lane_get_bit(state[mod(x, 5), mod(y, 5)], z)

def set_bit(state: np.ndarray, x: int, y: int, z: int, bit: int) -> None:
    x, y = mod(x, 5), mod(y, 5)
    old = int(state[x, y])
    new = lane_set_bit(old, z, bit)
    if new != old:
        state[x, y] = new

def to_state(words: Iterable[int]) -> np.ndarray:
    """Lay out flat words as a cube: word[i] becomes lane (x = i mod 5, y = i div 5)."""
    if not isinstance(words, np.ndarray):
        words = list(words)
    flat = np.asarray(words, dtype=np.uint64)
    if flat.ndim != 1:
        # a (5, 5) cube is indexed [x, y]; flatten it with from_state first
        raise ValueError(f"expected a flat list of words, got shape {flat.shape}")
    if flat.size > STATE_WORDS:
        raise ValueError(f"state holds {STATE_WORDS} words, got {flat.size}")
    padded = np.zeros(STATE_WORDS, dtype=np.uint64)
    padded[:flat.size] = flat
    return padded.reshape(5, 5).T.copy()

def from_state(state: np.ndarray) -> np.ndarray:
    return state.T.reshape(STATE_WORDS).copy()

# ---------------------------------------------------------------------------
# Round constants
# ---------------------------------------------------------------------------

def rc(t: int) -> int:
    t = mod(t, 255)
    if t == 0:
        return 1
    r = 1
    for _ in range(t):
        r <<= 1
        bit8 = (r >> 8) & 1
        r ^= bit8 | (bit8 << 4) | (bit8 << 5) | (bit8 << 6)
        r &= 0xFF
    return r & 1

def round_constant(round_index: int) -> int:
    lane = 0
    for j in range(7):
        lane = lane_set_bit(lane, (1 << j) - 1, rc(j + 7 * round_index))
    return lane

ROUND_CONSTANTS = np.array([round_constant(i) for i in range(ROUNDS)], dtype=np.uint64)

# ---------------------------------------------------------------------------
# Permutation steps
# ---------------------------------------------------------------------------

_U64 = np.uint64

def _rotate(lanes, offset):
    # result bit z = input bit z - offset; with z = 0 at the top this is a right rotation
    offset = np.asarray(offset, dtype=np.uint64) % _U64(LANE_BITS)
    return (lanes >> offset) | (lanes << ((_U64(LANE_BITS) - offset) % _U64(LANE_BITS)))

def _rho_offsets() -> np.ndarray:
    offsets = np.zeros((5, 5), dtype=np.uint64)
    x, y = 1, 0
    for t in range(24):
        offsets[x, y] = mod((t + 1) * (t + 2) // 2, LANE_BITS)
        x, y = y, mod(2 * x + 3 * y, 5)
    return offsets

RHO_OFFSETS = _rho_offsets()

# pi: A'[x, y] = A[x + 3y, x]
PI_SRC_X = np.array([[mod(x + 3 * y, 5) for y in range(5)] for x in range(5)])
PI_SRC_Y = np.array([[x for y in range(5)] for x in range(5)])

def theta(state: np.ndarray) -> np.ndarray:
    # C and D are sheets indexed by x
    C = np.bitwise_xor.reduce(state, axis=1)
    D = np.roll(C, 1) ^ _rotate(np.roll(C, -1), 1)
    return state ^ D[:, None]

def rho(state: np.ndarray) -> np.ndarray:
    return _rotate(state, RHO_OFFSETS)

def pi(state: np.ndarray) -> np.ndarray:
    return state[PI_SRC_X, PI_SRC_Y]

def chi(state: np.ndarray) -> np.ndarray:
    return state ^ (~np.roll(state, -1, axis=0) & np.roll(state, -2, axis=0))

def iota(state: np.ndarray, round_index: int) -> np.ndarray:
    out = state.copy()
    out[0, 0] ^= ROUND_CONSTANTS[round_index]
    return out

def keccak_round(state: np.ndarray, round_index: int) -> np.ndarray:
    return iota(chi(pi(rho(theta(state)))), round_index)

def permute(words: Iterable[int], rounds: int = ROUNDS) -> np.ndarray:
    """Keccak-f[1600] over 25 words.

    Only the last ``rounds`` rounds are applied (indices ``24 - rounds .. 23``)
    so round constants keep their absolute numbering.
    """
    if isinstance(rounds, bool) or not 0 <= rounds <= ROUNDS:
        raise ValueError(f"rounds must be in 0..{ROUNDS}, got {rounds}")
    state = to_state(words)
    for i in range(ROUNDS - rounds, ROUNDS):
        state = keccak_round(state, i)
    return from_state(state)

# ---------------------------------------------------------------------------
# Sponge construction
# ---------------------------------------------------------------------------

# lane bit z = 8k + j holds bit j (LSB first) of byte k, so bytes are bit-reflected
# on their way in and out of big-endian words
REFLECT = bytes(int(f"{b:08b}"[::-1], 2) for b in range(256))

def suffix_bits(suffix: Bits) -> list:
    if isinstance(suffix, str):
        if any(c not in "01" for c in suffix):
            raise ValueError(f"suffix must be a string of 0/1, got {suffix!r}")
        bits = [int(c) for c in suffix]
    else:
        bits = [int(b) for b in suffix]
        if any(b not in (0, 1) for b in bits):
            raise ValueError(f"suffix bits must be 0 or 1, got {list(suffix)!r}")
    if len(bits) > MAX_SUFFIX_BITS:
        raise ValueError(f"suffix is longer than {MAX_SUFFIX_BITS} bits: {len(bits)}")
    return bits

def suffix_to_byte(suffix: Bits) -> int:
    """Suffix bits, the 1 separator, then zeros; the lowest bit stays clear."""
    bits = suffix_bits(suffix)
    res = 0
    for b in bits:
        res = (res << 1) | b
    res = (res << 1) | 1
    res <<= MAX_SUFFIX_BITS - len(bits)
    return res << 1

def _check_rate(rate: int, capacity_bits: Optional[int] = None) -> None:
    if isinstance(rate, bool) or not isinstance(rate, (int, np.integer)):
        raise ValueError(f"rate must be an integer number of words, got {rate!r}")
    if not 1 <= rate < STATE_WORDS:
        raise ValueError(f"rate must be in 1..{STATE_WORDS - 1} words, got {rate}")
    if capacity_bits is not None and rate * LANE_BITS + capacity_bits != STATE_WORDS * LANE_BITS:
        raise ValueError(f"rate {rate * LANE_BITS} + capacity {capacity_bits} bits != 1600")

def _as_message(message) -> bytes:
    if isinstance(message, str):
        raise TypeError("message must be bytes-like; encode text first")
    return bytes(message)

def merge_bytes(message: bytes, suffix: Bits) -> np.ndarray:
    data = _as_message(message).translate(REFLECT) + bytes([suffix_to_byte(suffix)])
    data += b"\x00" * (-len(data) % 8)
    return np.frombuffer(data, dtype=">u8").astype(np.uint64)

def merge_words(words: np.ndarray, rate: int) -> np.ndarray:
    n_blocks = -(-len(words) // rate)
    blocks = np.zeros(n_blocks * rate, dtype=np.uint64)
    blocks[:len(words)] = words
    blocks = blocks.reshape(n_blocks, rate)
    # closing 1 of pad10*1; only valid while suffix + separator leave the low bit clear
    assert int(blocks[-1, -1]) & 1 == 0, "padding would overwrite a suffix bit"
    blocks[-1, -1] += _U64(1)
    return blocks

def padding(message: bytes, rate: int, suffix: Bits) -> np.ndarray:
    """pad10*1 with a domain suffix; returns an (n_blocks, rate) word array."""
    _check_rate(rate)
    return merge_words(merge_bytes(message, suffix), rate)

def split_bytes(words: Iterable[int]) -> bytes:
    return np.asarray(words, dtype=np.uint64).astype(">u8").tobytes().translate(REFLECT)

def format_state(words: Iterable[int]) -> str:
    raw = split_bytes(words).hex()
    return " ".join(raw[i:i+16] for i in range(0, len(raw), 16))

def keccak_c(message: bytes, rate: int, suffix: Bits, output_bits: int,
             capacity_bits: Optional[int] = None, trace: bool = False) -> bytes:
    """Absorb ``message`` and squeeze ``ceil(output_bits / 8)`` bytes."""
    _check_rate(rate, capacity_bits)
    suffix_bits(suffix)
    if isinstance(output_bits, bool) or not isinstance(output_bits, (int, np.integer)):
        raise ValueError(f"output_bits must be an integer, got {output_bits!r}")
    if output_bits < 0:
        raise ValueError(f"output_bits must be >= 0, got {output_bits}")
    output_bits = int(output_bits)
    blocks = padding(message, rate, suffix)

    state = np.zeros(STATE_WORDS, dtype=np.uint64)
    for k, block in enumerate(blocks, start=1):
        state[:rate] ^= block
        if trace: print(f"[absorb {k}] {format_state(state)}")
        state = permute(state, ROUNDS)
        if trace: print(f"[permute {k}] {format_state(state)}")

    out_len = -(-output_bits // 8)
    out = bytearray()
    while len(out) < out_len:
        out.extend(split_bytes(state[:rate])[:out_len - len(out)])
        if len(out) < out_len:
            state = permute(state, ROUNDS)
            if trace: print(f"[squeeze] {format_state(state)}")
    return bytes(out)

def sponge(rate: int, suffix: Bits, message: bytes, output_bits: int) -> bytes:
    return keccak_c(message, rate, suffix, output_bits)

# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Variant:
    name: str
    rate: int
    suffix: str
    output_bits: Optional[int] = None   # None: caller picks (XOF)
    standard: bool = True

    @property
    def xof(self) -> bool:
        return self.output_bits is None

    def digest(self, message: bytes, output_bits: Optional[int] = None, trace: bool = False) -> bytes:
        if self.xof:
            if output_bits is None:
                raise ValueError(f"{self.name} needs an output length in bits")
            bits = output_bits
        else:
            if output_bits is not None and output_bits != self.output_bits:
                raise ValueError(f"{self.name} has a fixed {self.output_bits}-bit output")
            bits = self.output_bits
        return keccak_c(message, self.rate, self.suffix, bits, trace=trace)

SHA3_SUFFIX = "01"
SHAKE_SUFFIX = "1111"

VARIANTS = {v.name: v for v in (
    Variant("sha3-224", 18, SHA3_SUFFIX, 224),
    Variant("sha3-256", 17, SHA3_SUFFIX, 256),
    Variant("sha3-384", 13, SHA3_SUFFIX, 384),
    Variant("sha3-512", 9, SHA3_SUFFIX, 512),
    Variant("shake128", 21, SHAKE_SUFFIX),
    Variant("shake256", 17, SHAKE_SUFFIX),
    Variant("shake512", 9, SHAKE_SUFFIX, standard=False),
)}

def get_variant(name: str) -> Variant:
    try:
        return VARIANTS[name.strip().lower().replace("_", "-")]
    except KeyError:
        raise ValueError(f"unknown algorithm {name!r}; choose from {', '.join(VARIANTS)}") from None

def hash_with(name: str, message: bytes, output_bits: Optional[int] = None) -> bytes:
    return get_variant(name).digest(message, output_bits)

def sha3_224(message: bytes) -> bytes: return VARIANTS["sha3-224"].digest(message)
def sha3_256(message: bytes) -> bytes: return VARIANTS["sha3-256"].digest(message)
def sha3_384(message: bytes) -> bytes: return VARIANTS["sha3-384"].digest(message)
def sha3_512(message: bytes) -> bytes: return VARIANTS["sha3-512"].digest(message)

def shake128(message: bytes, output_bits: int) -> bytes:
    return VARIANTS["shake128"].digest(message, output_bits)

def shake256(message: bytes, output_bits: int) -> bytes:
    return VARIANTS["shake256"].digest(message, output_bits)

def shake512(message: bytes, output_bits: int) -> bytes:
    """SHAKE with a 1024-bit capacity.

    Not a NIST function: extrapolated from SHAKE128/256, unverified, and not
    interoperable with anything else. Do not use it where a standard is expected.
    """
    return VARIANTS["shake512"].digest(message, output_bits)

# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def parse_hex(s: str) -> bytes:
    s = s.strip()
    try:
        return binascii.unhexlify(s[2:] if s.startswith("0x") else s)
    except (binascii.Error, ValueError) as e:
        raise argparse.ArgumentTypeError(f"Bad hex input: {e}")

def main(argv: Optional[Sequence[str]] = None) -> int:
    from SpongeHash.crypto.hash_helpers import (DEFAULT_ALGORITHM, DEFAULT_ENCODING,
                                                DEFAULT_OUTPUT_BITS, encode_text, hash_bytes)

    p = argparse.ArgumentParser(description="SHA-3 / SHAKE digests over the Keccak sponge")
    p.add_argument("--algo", default=DEFAULT_ALGORITHM, choices=list(VARIANTS),
                   help=f"Algorithm (default {DEFAULT_ALGORITHM})")
    src = p.add_mutually_exclusive_group()
    src.add_argument("--text", help="Text input, encoded with --encoding")
    src.add_argument("--file", help="Hash the raw bytes of this file")
    src.add_argument("--hex", type=parse_hex, help="Hex-encoded input bytes")
    p.add_argument("--encoding", choices=["le", "be"], default=DEFAULT_ENCODING,
                   help="Text encoding: le = standard bytes, be = bit-reflected bytes")
    p.add_argument("--bits", type=int, default=None,
                   help=f"Output bits for SHAKE variants (default {DEFAULT_OUTPUT_BITS})")
    p.add_argument("--trace", action="store_true", help="Print the state after every absorb/permute")
    p.add_argument("--list", action="store_true", help="List algorithms and exit")
    args = p.parse_args(argv)

    if args.list:
        for v in VARIANTS.values():
            bits = v.output_bits if v.output_bits is not None else "xof"
            note = "" if v.standard else "  (non-standard)"
            print(f"{v.name:9s} rate={v.rate:2d} words  suffix={v.suffix:4s}  out={bits}{note}")
        return 0

    if args.text is not None:
        data, encoding = encode_text(args.text, args.encoding), args.encoding
    elif args.file is not None:
        with open(args.file, "rb") as f:
            data = f.read()
        encoding = "le"
    elif args.hex is not None:
        data, encoding = args.hex, "le"
    else:
        data, encoding = sys.stdin.buffer.read(), "le"

    variant = get_variant(args.algo)
    if not variant.xof and args.bits is not None:
        p.error(f"{variant.name} has a fixed {variant.output_bits}-bit output; drop --bits")
    if args.bits is not None and args.bits < 0:
        p.error("--bits must be >= 0")
    if not variant.standard:
        print(f"[warn] {variant.name} is not a standard algorithm; its output is unverified")

    if variant.xof:
        bits = args.bits if args.bits is not None else DEFAULT_OUTPUT_BITS
    else:
        bits = variant.output_bits
    env = hash_bytes(data, variant.name, bits, encoding=encoding, trace=args.trace)
    print(f"[hash] {env['algorithm']} bits={env['output_bits']} in={len(data)} bytes")
    print(f"[hash] {env['digest_display']}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
