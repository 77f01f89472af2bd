from app.models import Registration, Team
from app.services.registration_service import RegistrationService
from app.services.email_service import email_service
from app.services.notification_queue import notification_queue


def _register(client, user, event_id, teammates=None):
    return client.post(
        "/events/register",
        json={"eventId": event_id, "teammates": teammates or []},
        headers=user["headers"],
    )


def test_list_events_formats_date_and_time(client):
    response = client.get("/events")

    assert response.status_code == 200
    events = response.json()
    assert len(events) == 10
    assert events[0] == {
        "id": 1,
        "name": "Event 1",
        "date": "14-03-2026",
        "time": "10:00:00",
        "venue": "Main Hall",
    }


def test_register_requires_session(client):
    response = client.post("/events/register", json={"eventId": 2, "teammates": []})

    assert response.status_code == 401


def test_register_unknown_event(client, make_user):
    user = make_user()

    response = _register(client, user, 99)

    assert response.status_code == 404


def test_pair_event_accepts_one_teammate(client, make_user, db_session):
    user, mate = make_user(), make_user()

    response = _register(client, user, 1, [mate["qr_code_id"]])

    assert response.status_code == 201
    assert response.json()["team"] == f"{user['id']},{mate['id']}"
    rows = db_session.query(Registration).filter(Registration.event_id == 1).all()
    assert {row.user_id for row in rows} == {user["id"], mate["id"]}
    team = db_session.query(Team).filter(Team.event_id == 1).one()
    assert team.members == f"{user['id']},{mate['id']}"


def test_pair_event_accepts_solo_with_empty_slot(client, make_user):
    user = make_user()

    response = _register(client, user, 1, ["0"])

    assert response.status_code == 201
    assert response.json()["team"] == str(user["id"])


def test_pair_event_rejects_two_teammates(client, make_user, db_session):
    user, first, second = make_user(), make_user(), make_user()

    response = _register(client, user, 1, [str(first["id"]), str(second["id"])])

    assert response.status_code == 400
    assert response.json()["detail"] == "Max 1 teammate(s) allowed."
    assert db_session.query(Registration).count() == 0


def test_team_event_rejects_solo(client, make_user):
    user = make_user()

    response = _register(client, user, 6, ["0", "0", "0"])

    assert response.status_code == 400
    assert response.json()["detail"] == "All teammates are required for this event."


def test_team_event_accepts_up_to_three_teammates(client, make_user, db_session):
    user = make_user()
    mates = [make_user() for _ in range(3)]

    response = _register(client, user, 8, [m["qr_code_id"] for m in mates])

    assert response.status_code == 201
    assert db_session.query(Registration).filter(Registration.event_id == 8).count() == 4


def test_team_event_rejects_four_teammates(client, make_user):
    user = make_user()
    mates = [make_user() for _ in range(4)]

    response = _register(client, user, 7, [m["qr_code_id"] for m in mates])

    assert response.status_code == 400


def test_individual_event_rejects_any_teammate(client, make_user):
    user, mate = make_user(), make_user()

    response = _register(client, user, 3, [mate["qr_code_id"]])

    assert response.status_code == 400
    assert response.json()["detail"] == "Max 0 teammate(s) allowed."


def test_duplicate_registration_conflicts(client, make_user):
    user = make_user()

    assert _register(client, user, 2).status_code == 201
    response = _register(client, user, 2)

    assert response.status_code == 409


def test_user_listed_as_own_teammate_is_rejected(client, make_user, db_session):
    user = make_user()

    response = _register(client, user, 6, [user["qr_code_id"]])

    assert response.status_code == 400
    assert response.json()["detail"] == "Duplicate teammate IDs found."
    assert db_session.query(Registration).count() == 0


def test_single_pass_holder_limited_to_one_event(client, make_user):
    user = make_user(pass_type="single")

    assert _register(client, user, 2).status_code == 201
    response = _register(client, user, 3)

    assert response.status_code == 403


def test_single_pass_teammate_already_registered_blocks_team(client, make_user, db_session):
    user, mate = make_user(), make_user(pass_type="single")
    assert _register(client, mate, 2).status_code == 201

    response = _register(client, user, 1, [mate["qr_code_id"]])

    assert response.status_code == 403
    assert db_session.query(Registration).filter(Registration.event_id == 1).count() == 0


def test_unknown_teammate_is_rejected_before_any_write(client, make_user, db_session):
    user = make_user()

    response = _register(client, user, 6, ["PSM_9999"])

    assert response.status_code == 404
    assert db_session.query(Registration).count() == 0
    assert db_session.query(Team).count() == 0


def test_teammate_already_registered_conflicts(client, make_user):
    user, mate = make_user(), make_user()
    assert _register(client, mate, 1).status_code == 201

    response = _register(client, user, 1, [mate["qr_code_id"]])

    assert response.status_code == 409


def test_unparsable_teammate_is_validation_error(client, make_user):
    user = make_user()

    response = _register(client, user, 1, ["abc"])

    assert response.status_code == 400


def test_slots_taken_counts_teams(client, make_user):
    user, mate, other = make_user(), make_user(), make_user()
    _register(client, user, 1, [mate["qr_code_id"]])
    _register(client, other, 1)

    response = client.get("/events/slots-taken/1")

    assert response.status_code == 200
    assert response.json() == {"event_id": 1, "slots_taken": 2}


def test_confirmation_sent_to_every_member(make_user, client, monkeypatch):
    sent = []

    async def _fake_confirmation(name, email, qr_code_id, event):
        sent.append((email, qr_code_id, event["name"]))

    monkeypatch.setattr(email_service, "send_registration_confirmation", _fake_confirmation)
    user, mate = make_user(), make_user()

    response = _register(client, user, 1, [mate["qr_code_id"]])
    client.portal.call(notification_queue.join)

    assert response.status_code == 201
    assert sorted(sent) == sorted([
        (user["email"], user["qr_code_id"], "Event 1"),
        (mate["email"], mate["qr_code_id"], "Event 1"),
    ])


def test_notification_failure_does_not_fail_registration(client, make_user, monkeypatch, db_session):
    async def _broken_confirmation(**kwargs):
        raise RuntimeError("smtp unavailable")

    monkeypatch.setattr(email_service, "send_registration_confirmation", _broken_confirmation)
    user = make_user()

    response = _register(client, user, 4)

    assert response.status_code == 201
    assert db_session.query(Registration).filter(Registration.user_id == user["id"]).count() == 1


def test_team_event_accepts_single_teammate(client, make_user, db_session):
    user, mate = make_user(), make_user()

    response = _register(client, user, 9, [mate["qr_code_id"], "0", "0"])

    assert response.status_code == 201
    assert response.json()["team"] == f"{user['id']},{mate['id']}"
    assert db_session.query(Registration).filter(Registration.event_id == 9).count() == 2


def test_oversized_teammate_id_is_validation_error(client, make_user, db_session):
    user = make_user()

    response = _register(client, user, 1, ["PSM_99999999999999999999"])

    assert response.status_code == 400
    assert "SQLite" not in response.text
    assert db_session.query(Registration).count() == 0


def test_oversized_event_id_is_rejected(client, make_user):
    user = make_user()

    response = _register(client, user, 2**63)

    assert response.status_code == 422


def test_unique_violation_during_write_conflicts(client, make_user, db_session, monkeypatch):
    user = make_user()
    assert _register(client, user, 2).status_code == 201

    async def _not_registered(user_id, event_id):
        return False

    monkeypatch.setattr(RegistrationService, "is_already_registered", staticmethod(_not_registered))
    response = _register(client, user, 2)

    assert response.status_code == 409
    assert db_session.query(Registration).filter(Registration.event_id == 2).count() == 1
    assert db_session.query(Team).filter(Team.event_id == 2).count() == 1
