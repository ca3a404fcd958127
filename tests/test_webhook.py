import pytest
from httpx import ASGITransport, AsyncClient

from app import get_orchestrator
from config import HELP_TEXT
from webhook import app


@pytest.fixture
def client(orchestrator):
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    yield AsyncClient(transport=ASGITransport(app=app, raise_app_exceptions=False),
                      base_url="http://test")
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_healthz(client):
    resp = await client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


@pytest.mark.asyncio
async def test_first_sms_gets_help_as_twiml(client, store):
    resp = await client.post("/sms", data={
        "Body": "Brooklyn", "From": "+17185550100", "FromCity": "BROOKLYN", "FromZip": "11201",
    })

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/xml")
    assert "<Response><Message>" in resp.text
    # quotes in the help text are left alone, only &, < and > are escaped
    assert HELP_TEXT.replace("&", "&amp;") in resp.text
    assert (await store.find_session("+17185550100")).zip == "11201"


@pytest.mark.asyncio
async def test_search_reply(client, orchestrator):
    await client.post("/sms", data={"Body": "hi", "From": "+17185550100"})
    await orchestrator.drain()

    resp = await client.post("/sms", data={"Body": "45th st & 8th Ave", "From": "+17185550100"})

    assert resp.status_code == 200
    assert "Name: Restroom 0" in resp.text
    assert "Text NEXT for more results" in resp.text


@pytest.mark.asyncio
async def test_missing_sender_is_rejected(client):
    resp = await client.post("/sms", data={"Body": "hi"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_fault_returns_server_error(client, orchestrator, maps):
    await client.post("/sms", data={"Body": "hi", "From": "+17185550100"})
    await orchestrator.drain()
    maps.failing_place_ids.add("place0")

    resp = await client.post("/sms", data={"Body": "Brooklyn", "From": "+17185550100"})

    assert resp.status_code == 500
    assert "Message" not in resp.text
