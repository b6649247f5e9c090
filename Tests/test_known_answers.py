import os, sys, hashlib, numpy as np, pytest
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

from keccak_sponge_cli import (sha3_224, sha3_256, sha3_384, sha3_512, shake128, shake256,
                               shake512, hash_with, get_variant, VARIANTS)

TRIALS = int(os.getenv("SPONGE_TRIALS", "6"))

def test_sha3_256_empty():
    assert sha3_256(b"").hex() == "a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a"

def test_sha3_256_abc():
    assert sha3_256(b"abc").hex() == "3a985da74fe225b2045c172d6bd390bd855f086e3e9d525b46bfe24511431532"

def test_shake128_empty_256():
    assert shake128(b"", 256).hex() == "7f9c2ba4e88f827d616045507605853ed73b8093f6efbc88eb1a6eacfa66ef26"

def test_sha3_224_abc():
    assert sha3_224(b"abc").hex() == "e642824c3f8cf24ad09234ee7d3c766fc9a3a5168d0c94ad73b46fdf"

def test_sha3_512_empty():
    assert sha3_512(b"").hex() == (
        "a69f73cca23a9ac5c8b567dc185a756e97c982164fe25859e0d1dcc1475c80a6"
        "15b2123af1f5f94c11e3e9402c3ac558f500199d95b6d3e301758586281dcd26")

def test_shake256_empty_512():
    assert shake256(b"", 512).hex() == (
        "46b9dd2b0ba88d13233b3feb743eeb243fcd52ea62b81b82b50c27646ed5762f"
        "d75dc4ddd8c0f200cb05019d67b592f6fc821c49479ab48640292eacb3b7c4be")

FIXED = [
    (sha3_224, hashlib.sha3_224, 18),
    (sha3_256, hashlib.sha3_256, 17),
    (sha3_384, hashlib.sha3_384, 13),
    (sha3_512, hashlib.sha3_512, 9),
]

def boundary_lengths(rate: int) -> list:
    block = rate * 8
    return sorted({0, 1, 7, 8, 9, block - 2, block - 1, block, block + 1, 2 * block - 1, 2 * block})

@pytest.mark.parametrize("ours,ref,rate", FIXED)
def test_fixed_variants_match_hashlib(ours, ref, rate):
    rng = np.random.default_rng(rate)
    for n in boundary_lengths(rate):
        msg = rng.bytes(n)
        assert ours(msg) == ref(msg).digest(), n

@pytest.mark.parametrize("ours,ref,rate", [
    (shake128, hashlib.shake_128, 21),
    (shake256, hashlib.shake_256, 17),
])
def test_shake_matches_hashlib(ours, ref, rate):
    rng = np.random.default_rng(rate + 100)
    for n in boundary_lengths(rate)[:TRIALS]:
        msg = rng.bytes(n)
        for out_bytes in (1, 32, rate * 8, rate * 8 + 1, 3 * rate * 8 + 5):
            assert ours(msg, out_bytes * 8) == ref(msg).digest(out_bytes), (n, out_bytes)

def test_shake512_is_labelled_non_standard():
    v = get_variant("shake512")
    assert not v.standard
    assert v.rate == 9 and v.suffix == "1111"
    assert all(VARIANTS[n].standard for n in VARIANTS if n != "shake512")
    assert "Not a NIST function" in shake512.__doc__
    assert "unverified" in shake512.__doc__

def test_shake512_behaves_like_an_xof():
    out = shake512(b"abc", 2048)
    assert len(out) == 256
    assert shake512(b"abc", 512) == out[:64]
    assert out[:64] != shake256(b"abc", 512)
    assert out[:64] != sha3_512(b"abc")

def test_hash_with_names():
    assert hash_with("SHA3_256", b"abc") == sha3_256(b"abc")
    assert hash_with("shake128", b"abc", 128) == shake128(b"abc", 128)
    with pytest.raises(ValueError):
        hash_with("sha3-1024", b"abc")
    with pytest.raises(ValueError):
        hash_with("shake256", b"abc")
    with pytest.raises(ValueError):
        hash_with("sha3-256", b"abc", 512)
    assert hash_with("sha3-256", b"abc", 256) == sha3_256(b"abc")

if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-q"]))
