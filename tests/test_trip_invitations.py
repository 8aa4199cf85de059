from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from main import app
from models import Participant


def test_invite_creates_unconfirmed_participant(client, session_factory, mail, make_trip):
    trip = make_trip()

    resp = client.post(f"/trips/{trip.id}/invites", json={"email": "new@example.com"})

    assert resp.status_code == 201
    participant_id = UUID(resp.json()["participantId"])
    with session_factory() as db:
        participant = db.get(Participant, participant_id)
        assert participant.trip_id == trip.id
        assert participant.is_owner is False
        assert participant.is_confirmed is False
        assert participant.name is None

    assert mail.recipients() == ["new@example.com"]
    assert f"http://api.test/participants/{participant_id}/confirm" in mail.sent[0].html


def test_invite_does_not_check_existing_emails(client, count_rows, make_trip):
    trip = make_trip(invitees=["guest@example.com"])

    resp = client.post(f"/trips/{trip.id}/invites", json={"email": "guest@example.com"})

    assert resp.status_code == 201
    assert count_rows(Participant, trip_id=trip.id, email="guest@example.com") == 2


def test_invite_unknown_trip(client, mail, count_rows):
    resp = client.post(f"/trips/{uuid4()}/invites", json={"email": "new@example.com"})

    assert resp.status_code == 404
    assert count_rows(Participant) == 0
    assert mail.sent == []


def test_invite_mail_failure_is_an_internal_error(client, mail, count_rows, make_trip):
    trip = make_trip()
    mail.fail_for = {"new@example.com"}

    with TestClient(app, raise_server_exceptions=False) as failing_client:
        resp = failing_client.post(f"/trips/{trip.id}/invites", json={"email": "new@example.com"})

    assert resp.status_code == 500
    assert resp.json() == {
        "statusCode": 500,
        "error": "InternalServerError",
        "message": "Something went wrong on the server.",
    }
    # the row is already committed when the send fails
    assert count_rows(Participant, email="new@example.com") == 1


def test_add_participant(client, session_factory, mail, make_trip):
    trip = make_trip()

    resp = client.patch(
        f"/trips/{trip.id}/participants",
        json={"name": "Nina New", "email": "nina@example.com"},
    )

    assert resp.status_code == 200
    assert resp.json()["message"] == "Participant added successfully."
    with session_factory() as db:
        participant = db.get(Participant, UUID(resp.json()["participantId"]))
        assert participant.name == "Nina New"
        assert participant.is_confirmed is False

    assert mail.recipients() == ["nina@example.com"]
    html = mail.sent[0].html
    assert "/confirm" in html
    assert "/manual-confirm" in html
    assert f"/trips/{trip.id}?participantId=" in html


@pytest.mark.parametrize("email", ["owner@example.com", "guest@example.com"])
def test_add_participant_rejects_known_email(client, mail, count_rows, make_trip, email):
    trip = make_trip(invitees=["guest@example.com"])

    resp = client.patch(
        f"/trips/{trip.id}/participants",
        json={"name": "Duplicate", "email": email},
    )

    assert resp.status_code == 409
    assert resp.json()["error"] == "ClientError"
    assert count_rows(Participant, trip_id=trip.id) == 2
    assert mail.sent == []


def test_add_participant_unknown_trip(client):
    resp = client.patch(
        f"/trips/{uuid4()}/participants",
        json={"name": "Nina New", "email": "nina@example.com"},
    )

    assert resp.status_code == 404
