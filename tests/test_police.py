import uuid
from datetime import datetime, timedelta

from sqlalchemy.exc import OperationalError

from models import Fine, Report


def test_pending_lists_newest_first(client, db_session, submit_report):
    older = submit_report(vehicle_number="OLD1")
    newer = submit_report(vehicle_number="NEW1")
    db_session.query(Report).filter(Report.vehicle_number == "OLD1").update(
        {"created_at": datetime.utcnow() - timedelta(hours=1)}
    )
    db_session.commit()

    response = client.get("/api/police/reports/pending")

    assert response.status_code == 200
    assert [r["_id"] for r in response.json()] == [newer, older]


def test_pending_excludes_reviewed_reports(client, submit_report):
    reviewed = submit_report()
    pending = submit_report()
    client.post(f"/api/police/reports/{reviewed}/decision", json={"decision": "Reject"})

    ids = [r["_id"] for r in client.get("/api/police/reports/pending").json()]

    assert ids == [pending]


def test_approve_with_fine_creates_one_fine(client, db_session, submit_report):
    report_id = submit_report(vehicle_number="KA01AB1234")

    response = client.post(f"/api/police/reports/{report_id}/decision", json={"decision": "Approve", "fineAmount": 500})

    assert response.status_code == 200
    assert response.json()["message"] == "Report approved and fine (if any) created."
    fine = db_session.query(Fine).one()
    assert str(fine.report_id) == report_id
    assert fine.vehicle_number == "KA01AB1234"
    assert fine.amount == 500
    assert fine.status == "Unpaid"
    assert db_session.query(Report).one().status == "Approved"


def test_approve_without_fine_creates_none(client, db_session, submit_report):
    first = submit_report()
    second = submit_report()

    client.post(f"/api/police/reports/{first}/decision", json={"decision": "Approve", "fineAmount": 0})
    client.post(f"/api/police/reports/{second}/decision", json={"decision": "Approve"})

    assert db_session.query(Fine).count() == 0
    assert {r.status for r in db_session.query(Report).all()} == {"Approved"}


def test_negative_fine_is_rejected(client, db_session, submit_report):
    report_id = submit_report()

    response = client.post(f"/api/police/reports/{report_id}/decision", json={"decision": "Approve", "fineAmount": -5})

    assert response.status_code == 400
    assert "fineAmount" in response.json()["detail"]
    assert db_session.query(Report).one().status == "Pending Review"


def test_reject(client, db_session, submit_report):
    report_id = submit_report()

    response = client.post(f"/api/police/reports/{report_id}/decision", json={"decision": "Reject", "fineAmount": 100})

    assert response.status_code == 200
    assert response.json()["message"] == "Report rejected."
    assert db_session.query(Report).one().status == "Rejected"
    assert db_session.query(Fine).count() == 0


def test_invalid_decision(client, db_session, submit_report):
    report_id = submit_report()

    response = client.post(f"/api/police/reports/{report_id}/decision", json={"decision": "Maybe"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid decision"
    assert db_session.query(Report).one().status == "Pending Review"


def test_decision_on_unknown_report(client):
    for report_id in (str(uuid.uuid4()), "not-an-id"):
        response = client.post(f"/api/police/reports/{report_id}/decision", json={"decision": "Approve"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Report not found"


def test_decisions_are_final(client, db_session, submit_report):
    report_id = submit_report()
    client.post(f"/api/police/reports/{report_id}/decision", json={"decision": "Approve", "fineAmount": 300})

    again = client.post(f"/api/police/reports/{report_id}/decision", json={"decision": "Reject"})
    repeat = client.post(f"/api/police/reports/{report_id}/decision", json={"decision": "Approve", "fineAmount": 300})

    assert again.status_code == 409
    assert repeat.status_code == 409
    report = client.get("/api/reports/search", params={"reportId": report_id}).json()[0]
    assert report["status"] == "Approved"
    assert db_session.query(Fine).count() == 1


def test_store_failure_on_decision_is_generic(client, db_session, submit_report, monkeypatch):
    report_id = submit_report()

    def failing_commit():
        raise OperationalError("UPDATE reports", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "commit", failing_commit)
    response = client.post(f"/api/police/reports/{report_id}/decision", json={"decision": "Reject"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Server error", "error": "Server error"}
