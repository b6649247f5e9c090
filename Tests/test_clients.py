import os, sys, hashlib
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

import requests
from fastapi.testclient import TestClient
from SpongeHash.server.server import app
from SpongeHash.client import hash_text as text_client
from SpongeHash.client import hash_file as file_client

client = TestClient(app)

def route_to_app(monkeypatch):
    monkeypatch.setattr(requests, "post", lambda url, json, timeout: client.post(url, json=json))

def test_request_hash(monkeypatch):
    route_to_app(monkeypatch)
    env = text_client.request_hash("http://sponge.local", "shake128", "abc", output_bits=128)
    assert env["digest_hex"] == hashlib.shake_128(b"abc").hexdigest(16)

def test_text_client_main(monkeypatch, capsys):
    route_to_app(monkeypatch)
    monkeypatch.setattr(sys, "argv", ["hash_text.py", "sha3-384", "hello", "world"])
    text_client.main()
    out = capsys.readouterr().out
    assert "[sha3-384]" in out
    assert "local match=True" in out

def test_file_client_main(monkeypatch, capsys, tmp_path):
    route_to_app(monkeypatch)
    path = tmp_path / "blob.bin"
    path.write_bytes(bytes(range(256)) * 3)
    monkeypatch.setattr(sys, "argv", ["hash_file.py", "shake256", str(path), "520"])
    file_client.main()
    out = capsys.readouterr().out
    assert "blob.bin (768 bytes)" in out
    assert "local match=True" in out

if __name__ == "__main__":
    import pytest
    sys.exit(pytest.main([__file__, "-q"]))
