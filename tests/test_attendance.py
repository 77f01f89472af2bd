from app.models import Attendance, Registration


def _mark(client, admin, qr_code_id, event_id):
    return client.post(
        "/admin/mark-attendance",
        json={"qr_code_id": qr_code_id, "event_id": event_id},
        headers=admin["headers"],
    )


def test_mark_attendance_requires_admin(client, make_user):
    user = make_user()

    response = _mark(client, user, user["qr_code_id"], 10)

    assert response.status_code == 403


def test_registered_participant_is_marked_present(client, make_user, make_admin, db_session):
    admin, user = make_admin(), make_user()
    client.post("/events/register", json={"eventId": 2, "teammates": []}, headers=user["headers"])

    response = _mark(client, admin, user["qr_code_id"], 2)

    assert response.status_code == 200
    assert response.json()["success"] is True
    record = db_session.query(Attendance).one()
    assert (record.event_id, record.user_id, record.admin_id) == (2, user["id"], admin["id"])
    assert record.attendance_status == "present"


def test_pre_registration_event_without_registration_is_forbidden(client, make_user, make_admin, db_session):
    admin, user = make_admin(), make_user()

    response = _mark(client, admin, user["qr_code_id"], 2)

    assert response.status_code == 403
    assert db_session.query(Attendance).count() == 0


def test_walk_in_event_registers_participant(client, make_user, make_admin, db_session):
    admin, user = make_admin(), make_user()

    response = _mark(client, admin, user["qr_code_id"], 10)

    assert response.status_code == 200
    registration = db_session.query(Registration).filter(Registration.user_id == user["id"]).one()
    assert registration.event_id == 10


def test_second_mark_conflicts(client, make_user, make_admin):
    admin, user = make_admin(), make_user()
    assert _mark(client, admin, user["qr_code_id"], 10).status_code == 200

    response = _mark(client, admin, user["qr_code_id"], 10)

    assert response.status_code == 409
    assert response.json()["detail"] == "Attendance already marked!"


def test_unknown_code_and_event_not_found(client, make_user, make_admin):
    admin, user = make_admin(), make_user()

    assert _mark(client, admin, "PSM_424242", 10).status_code == 404
    assert _mark(client, admin, user["qr_code_id"], 99).status_code == 404


def test_attendance_reports(client, make_user, make_admin):
    admin, user = make_admin(), make_user(name="Walk In")
    _mark(client, admin, user["qr_code_id"], 10)

    overall = client.get("/admin/overall-attendance", headers=admin["headers"])
    mine = client.get("/admin/attendance", headers=admin["headers"])

    assert overall.status_code == 200
    assert overall.json()[0]["user_name"] == "Walk In"
    assert overall.json()[0]["event_name"] == "Event 10"
    assert mine.json()["data"][0]["participant_name"] == "Walk In"


def test_overall_attendance_hidden_from_users(client, make_user):
    user = make_user()

    assert client.get("/admin/overall-attendance", headers=user["headers"]).status_code == 403


def test_admin_profile(client, make_admin):
    admin = make_admin(name="Head Volunteer")

    response = client.get("/admin/profile", headers=admin["headers"])

    assert response.status_code == 200
    assert response.json()["name"] == "Head Volunteer"
