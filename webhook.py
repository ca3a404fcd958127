"""
SMS Webhook
Twilio-style inbound endpoint answering with TwiML
"""
from contextlib import asynccontextmanager
from typing import Optional
from xml.sax.saxutils import escape

from fastapi import Depends, FastAPI, Form
from fastapi.responses import Response

from app import get_orchestrator, shutdown_orchestrator
from config import LOG_DIR, LOG_FILE, LOG_LEVEL, get_logger, setup_logging
from core import SessionOrchestrator
from models import InboundMessage

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(level=LOG_LEVEL, log_file=LOG_FILE, log_dir=LOG_DIR)
    yield
    await shutdown_orchestrator()


app = FastAPI(title="Ask George SMS", version="1.0.0", lifespan=lifespan)


def twiml(reply: str) -> Response:
    body = f'<?xml version="1.0" encoding="UTF-8"?><Response><Message>{escape(reply)}</Message></Response>'
    return Response(content=body, media_type="application/xml")


@app.get("/healthz")
async def healthz():
    return {"ok": True}


@app.post("/sms")
async def receive_sms(
    Body: str = Form(""),
    From: str = Form(...),
    FromCity: Optional[str] = Form(None),
    FromState: Optional[str] = Form(None),
    FromCountry: Optional[str] = Form(None),
    FromZip: Optional[str] = Form(None),
    orchestrator: SessionOrchestrator = Depends(get_orchestrator),
):
    message = InboundMessage(
        Body=Body, From=From, FromCity=FromCity, FromState=FromState,
        FromCountry=FromCountry, FromZip=FromZip,
    )
    # Failures propagate as HTTP 500 so no partial reply is ever sent
    reply = await orchestrator.handle_message(message)
    return twiml(reply)
