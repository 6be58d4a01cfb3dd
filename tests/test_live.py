"""Share-token live snapshot tests."""

from datetime import timedelta

from guardian_sos.services import sos_service


def _start(client, payload):
    return client.post("/api/sos/start", json=payload).json()


def test_snapshot_strips_token_and_contacts(client, start_payload):
    data = _start(client, start_payload)
    r = client.get(f"/api/live/token/{data['shareToken']}")
    assert r.status_code == 200
    snap = r.json()
    assert "shareToken" not in snap
    assert "contacts" not in snap
    assert data["shareToken"] not in r.text
    assert snap["sosId"] == data["sosId"]
    assert snap["displayName"] == "Alice"
    assert snap["status"] == "active"
    assert snap["endedAt"] is None
    assert snap["endReason"] is None
    assert snap["lastLocation"]["latitude"] == 51.5
    assert snap["lastLocation"]["longitude"] == -0.1


def test_unknown_token_is_404(client):
    r = client.get("/api/live/token/deadbeef")
    assert r.status_code == 404
    assert r.json()["detail"] == "Live link not found"


def test_expired_token_is_410_even_when_active(client, start_payload, store, monkeypatch):
    data = _start(client, start_payload)
    session = store.get(data["sosId"])
    assert session.status == "active"

    later = session.expires_at + timedelta(seconds=1)
    monkeypatch.setattr(sos_service, "_utcnow", lambda: later)

    r = client.get(f"/api/live/token/{data['shareToken']}")
    assert r.status_code == 410
    assert r.json()["detail"] == "Live link expired"


def test_token_valid_right_up_to_expiry(client, start_payload, store, monkeypatch):
    data = _start(client, start_payload)
    session = store.get(data["sosId"])
    monkeypatch.setattr(sos_service, "_utcnow", lambda: session.expires_at)

    assert client.get(f"/api/live/token/{data['shareToken']}").status_code == 200


def test_expiry_is_six_hours_after_creation(client, start_payload, store, monkeypatch):
    now = sos_service._utcnow()
    monkeypatch.setattr(sos_service, "_utcnow", lambda: now)
    data = _start(client, start_payload)

    session = store.get(data["sosId"])
    assert session.expires_at - now == timedelta(hours=6)


def test_expired_ended_session_is_still_gone(client, start_payload, store, monkeypatch):
    data = _start(client, start_payload)
    client.post("/api/sos/end", json={"sosId": data["sosId"], "reason": "safe"})
    session = store.get(data["sosId"])
    monkeypatch.setattr(sos_service, "_utcnow", lambda: session.expires_at + timedelta(minutes=5))

    assert client.get(f"/api/live/token/{data['shareToken']}").status_code == 410
