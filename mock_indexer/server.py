from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pathlib import Path
import json
import os

app = FastAPI(title="Mock Indexer Server", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/indexer_data") if os.path.exists("/indexer_data") else Path(__file__).resolve().parent / "data"


def _load(kind: str, address: str) -> JSONResponse:
    file = DATA_DIR / f"{kind}_{address.lower()}.json"
    if not file.exists():
        raise HTTPException(status_code=404, detail="wallet not found")
    return JSONResponse(content=json.loads(file.read_text()))


@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/v1/{chain_id}/address/{address}/balances_v2/")
def get_balances(chain_id: int, address: str):
    return _load("balances", address)

@app.get("/v1/{chain_id}/address/{address}/transactions_v2/")
def get_transactions(chain_id: int, address: str):
    return _load("transactions", address)
