import os, sys, requests
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
sys.path.insert(0, PROJECT_ROOT)
from SpongeHash.crypto.hash_helpers import hash_text, DEFAULT_ENCODING

DEFAULT_SERVER = os.getenv("SPONGE_SERVER", "http://127.0.0.1:8000")

def request_hash(server: str, algorithm: str, text: str,
                 encoding: str = DEFAULT_ENCODING, output_bits: int | None = None) -> dict:
    payload = {"algorithm": algorithm, "text": text, "encoding": encoding}
    if output_bits is not None:
        payload["output_bits"] = output_bits
    r = requests.post(f"{server}/hash", json=payload, timeout=10)
    r.raise_for_status()
    return r.json()

def main():
    if len(sys.argv) < 3:
        print("Usage: python3 hash_text.py <algorithm> <message...>  (server from SPONGE_SERVER)")
        sys.exit(1)

    algorithm = sys.argv[1]
    message = " ".join(sys.argv[2:])

    remote = request_hash(DEFAULT_SERVER, algorithm, message)
    local = hash_text(message, algorithm, remote["encoding"], remote["output_bits"])
    print(f"[{remote['algorithm']}] {remote['digest_grouped']}")
    print(f"[check] local match={local['digest_hex'] == remote['digest_hex']}")

if __name__ == "__main__":
    main()
