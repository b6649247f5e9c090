import os, sys, base64, requests
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
sys.path.insert(0, PROJECT_ROOT)
from SpongeHash.crypto.hash_helpers import hash_bytes

DEFAULT_SERVER = os.getenv("SPONGE_SERVER", "http://127.0.0.1:8000")

def main():
    if len(sys.argv) < 3:
        print("Usage: python3 hash_file.py <algorithm> <path_to_file> [output_bits]")
        sys.exit(1)

    algorithm, path = sys.argv[1:3]
    output_bits = int(sys.argv[3]) if len(sys.argv) > 3 else None

    with open(path, "rb") as f:
        data = f.read()

    payload = {
        "algorithm": algorithm,
        "data_b64": base64.b64encode(data).decode("ascii"),
        "output_bits": output_bits,
    }
    r = requests.post(f"{DEFAULT_SERVER}/hash", json=payload, timeout=30)
    r.raise_for_status()
    remote = r.json()
    local = hash_bytes(data, algorithm, remote["output_bits"])
    print(f"[{remote['algorithm']}] {os.path.basename(path)} ({len(data)} bytes): {remote['digest_grouped']}")
    print(f"[check] local match={local['digest_hex'] == remote['digest_hex']}")

if __name__ == "__main__":
    main()
