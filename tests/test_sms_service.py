"""Twilio SMS notifier tests."""

import asyncio
from urllib.parse import parse_qs

import httpx

from guardian_sos.services.sms_service import SmsService


def _service(handler, **overrides):
    kwargs = {
        "account_sid": "AC123",
        "auth_token": "secret",
        "from_number": "+15550000000",
        "api_base": "https://twilio.test/",
        "transport": httpx.MockTransport(handler),
    }
    kwargs.update(overrides)
    return SmsService(**kwargs)


def test_send_message_posts_form_to_twilio():
    seen: list[httpx.Request] = []

    def handler(request):
        seen.append(request)
        return httpx.Response(201, json={"sid": "SM1"})

    ok = asyncio.run(_service(handler).send_message("+447000000001", "help"))

    assert ok is True
    assert len(seen) == 1
    req = seen[0]
    assert req.method == "POST"
    assert str(req.url) == "https://twilio.test/2010-04-01/Accounts/AC123/Messages.json"
    assert req.headers["authorization"].startswith("Basic ")
    form = parse_qs(req.content.decode())
    assert form == {"To": ["+447000000001"], "From": ["+15550000000"], "Body": ["help"]}


def test_send_message_reports_http_error_as_false():
    def handler(request):
        return httpx.Response(400, json={"message": "invalid number"})

    assert asyncio.run(_service(handler).send_message("bad", "help")) is False


def test_broadcast_isolates_failures():
    def handler(request):
        to = parse_qs(request.content.decode())["To"][0]
        if to == "+2":
            return httpx.Response(500)
        if to == "+3":
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(201, json={"sid": f"SM{to}"})

    results = asyncio.run(_service(handler).broadcast(["+1", "+2", "+3", "+4"], "help"))

    assert results == {"+1": True, "+2": False, "+3": False, "+4": True}


def test_broadcast_with_no_recipients_sends_nothing():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(201)

    assert asyncio.run(_service(handler).broadcast([], "help")) == {}
    assert calls == []


def test_unconfigured_service_never_calls_twilio():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(201)

    service = _service(handler, auth_token="")
    assert service.enabled is False
    assert asyncio.run(service.send_message("+1", "help")) is False
    assert asyncio.run(service.broadcast(["+1", "+2"], "help")) == {"+1": False, "+2": False}
    assert calls == []
