import binascii
from typing import Optional
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from ..crypto.hash_helpers import (hash_text, hash_b64, DEFAULT_ALGORITHM,
                                   DEFAULT_ENCODING)
from keccak_sponge_cli import VARIANTS

app = FastAPI(title="Keccak sponge hashing service")

class HashRequest(BaseModel):
    algorithm: str = DEFAULT_ALGORITHM
    text: Optional[str] = None
    data_b64: Optional[str] = None
    encoding: str = DEFAULT_ENCODING
    output_bits: Optional[int] = None

@app.get("/algorithms")
def algorithms():
    return [
        {
            "name": v.name,
            "rate_words": v.rate,
            "suffix": v.suffix,
            "output_bits": v.output_bits,
            "xof": v.xof,
            "standard": v.standard,
        }
        for v in VARIANTS.values()
    ]

@app.post("/hash")
def hash_message(req: HashRequest):
    if (req.text is None) == (req.data_b64 is None):
        raise HTTPException(status_code=400, detail="send exactly one of text or data_b64")
    try:
        if req.text is not None:
            return hash_text(req.text, req.algorithm, req.encoding, req.output_bits)
        return hash_b64(req.data_b64, req.algorithm, req.output_bits)
    except (ValueError, binascii.Error) as e:
        raise HTTPException(status_code=400, detail=str(e))
