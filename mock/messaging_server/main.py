from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional
import os

app = FastAPI(title="Mock Messaging Server", version="1.0.0")
# Comma-separated recipients that should bounce, to exercise failure handling
FAILING_RECIPIENTS = set(filter(None, os.environ.get("MOCK_FAILING_RECIPIENTS", "").split(",")))
outbox: list[dict] = []


class EmailMessage(BaseModel):
    to: str
    subject: str
    body: str
    tenant_id: int
    stage: str


class SmsMessage(BaseModel):
    to: str
    body: str
    tenant_id: int
    stage: str


@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/email")
def send_email(message: EmailMessage):
    if message.to in FAILING_RECIPIENTS:
        raise HTTPException(status_code=502, detail="recipient rejected")
    outbox.append({"channel": "EMAIL", **message.model_dump()})
    return {"status": "queued", "id": len(outbox)}

@app.post("/sms")
def send_sms(message: SmsMessage):
    if message.to in FAILING_RECIPIENTS:
        raise HTTPException(status_code=502, detail="recipient rejected")
    outbox.append({"channel": "SMS", **message.model_dump()})
    return {"status": "queued", "id": len(outbox)}

@app.get("/outbox")
def list_outbox(tenant_id: Optional[int] = None):
    return [m for m in outbox if tenant_id is None or m["tenant_id"] == tenant_id]
