"""알림 수명주기(작성/게시/보관), 대상 필터링, 조회수, 통계를 검증하는 테스트입니다."""

from datetime import datetime, timedelta

from app.models.notification import Notification, NotificationAudience
from app.services import notification_service
from tests.conftest import auth_headers


def _iso(days: float = 0) -> str:
    return (datetime.utcnow() + timedelta(days=days)).isoformat()


def _payload(**overrides) -> dict:
    data = {
        "title": "Exam timetable released",
        "body": "The final exam timetable is now available on the portal.",
        "type": "Academic",
        "targetAudience": ["common"],
        "expirationDate": _iso(10),
    }
    data.update(overrides)
    return data


def _create(client, headers, **overrides) -> dict:
    resp = client.post("/api/notifications", json=_payload(**overrides), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_notification_applies_defaults(client, seed_users, events):
    headers = auth_headers(client, "admin@autoshed.test")
    data = _create(client, headers, title="  Exam timetable released  ", tags=["exam", " exam ", "2026"])

    assert data["notificationId"] > 0
    assert data["title"] == "Exam timetable released"
    assert data["priority"] == "Medium"
    assert data["status"] == "Draft"
    assert data["author"] == "Admin"
    assert data["viewCount"] == 0
    assert data["tags"] == ["exam", "2026"]
    assert data["createdBy"] == seed_users["admin"].user_id
    assert events.names() == ["newNotice"]
    assert events.events[0][1]["notificationId"] == data["notificationId"]


def test_create_notification_rejects_expiration_before_effective(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    resp = client.post(
        "/api/notifications",
        json=_payload(effectiveDate=_iso(5), expirationDate=_iso(1)),
        headers=headers,
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"] == "Validation failed"
    assert "expirationDate" in body["errors"]


def test_create_notification_rejects_equal_dates(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    same = _iso(2)
    resp = client.post("/api/notifications", json=_payload(effectiveDate=same, expirationDate=same), headers=headers)
    assert resp.status_code == 400
    assert "expirationDate" in resp.json()["errors"]


def test_create_notification_rejects_empty_audience(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    resp = client.post("/api/notifications", json=_payload(targetAudience=[]), headers=headers)
    assert resp.status_code == 400
    assert "targetAudience" in resp.json()["errors"]


def test_create_notification_reports_every_offending_field(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    resp = client.post(
        "/api/notifications",
        json=_payload(title="Hi", effectiveDate=_iso(5), expirationDate=_iso(1)),
        headers=headers,
    )
    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert set(errors) == {"title", "expirationDate"}
    assert errors["expirationDate"] == "Expiration date must be after effective date"


def test_create_notification_without_effective_date_rejects_past_expiration(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    resp = client.post(
        "/api/notifications",
        json=_payload(body="short", expirationDate=_iso(-1)),
        headers=headers,
    )
    assert resp.status_code == 400
    assert set(resp.json()["errors"]) == {"body", "expirationDate"}


def test_create_notification_rejects_bad_enum_and_short_title(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    resp = client.post("/api/notifications", json=_payload(type="Sports", title="Hi"), headers=headers)
    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert "type" in errors
    assert "title" in errors


def test_create_notification_requires_admin(client, seed_users):
    headers = auth_headers(client, "student@autoshed.test")
    resp = client.post("/api/notifications", json=_payload(), headers=headers)
    assert resp.status_code == 403


def test_attachments_accept_strings_and_rich_objects(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    data = _create(
        client,
        headers,
        attachments=[
            "https://files.autoshed.test/timetable.pdf",
            {"filename": "rules.pdf", "url": "https://files.autoshed.test/rules.pdf", "type": "application/pdf", "size": 2048},
        ],
    )
    assert data["attachments"][0] == {"kind": "simple", "url": "https://files.autoshed.test/timetable.pdf"}
    assert data["attachments"][1]["kind"] == "rich"
    assert data["attachments"][1]["filename"] == "rules.pdf"
    assert data["attachments"][1]["size"] == 2048


def test_published_notification_is_in_active_common_set(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    created = _create(client, headers, status="Published", effectiveDate=_iso(-1), expirationDate=_iso(7))

    resp = client.get("/api/notifications/active/common")
    assert resp.status_code == 200
    assert [row["notificationId"] for row in resp.json()] == [created["notificationId"]]


def test_active_set_excludes_draft_archived_expired_and_future(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    _create(client, headers, status="Draft", effectiveDate=_iso(-1))
    _create(client, headers, status="Archived", effectiveDate=_iso(-1))
    _create(client, headers, status="Published", effectiveDate=_iso(-5), expirationDate=_iso(-1))
    _create(client, headers, status="Published", effectiveDate=_iso(2), expirationDate=_iso(9))

    resp = client.get("/api/notifications/active/common")
    assert resp.status_code == 200
    assert resp.json() == []


def test_active_set_orders_by_priority_then_effective_date(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    low = _create(client, headers, status="Published", priority="Low", effectiveDate=_iso(-1))
    high_old = _create(client, headers, status="Published", priority="High", effectiveDate=_iso(-3))
    medium = _create(client, headers, status="Published", priority="Medium", effectiveDate=_iso(-2))
    high_new = _create(client, headers, status="Published", priority="High", effectiveDate=_iso(-1))

    resp = client.get("/api/notifications/active/common")
    ids = [row["notificationId"] for row in resp.json()]
    assert ids == [
        high_new["notificationId"],
        high_old["notificationId"],
        medium["notificationId"],
        low["notificationId"],
    ]


def test_active_set_filters_by_audience(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    students_only = _create(client, headers, status="Published", effectiveDate=_iso(-1), targetAudience=["students"])
    both = _create(
        client,
        headers,
        status="Published",
        effectiveDate=_iso(-1),
        targetAudience=["examiners", "students", "examiners"],
    )
    assert both["targetAudience"] == ["students", "examiners"]

    students = client.get("/api/notifications/audience/students").json()
    examiners = client.get("/api/notifications/audience/examiners").json()
    common = client.get("/api/notifications/active/common").json()

    assert {row["notificationId"] for row in students} == {students_only["notificationId"], both["notificationId"]}
    assert [row["notificationId"] for row in examiners] == [both["notificationId"]]
    assert common == []


def test_unknown_audience_is_validation_error(client):
    resp = client.get("/api/notifications/audience/parents")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Validation failed"


def test_active_set_excludes_notification_expiring_exactly_now(db):
    now = datetime(2026, 3, 1, 12, 0, 0)
    noti = Notification(
        title="Lab closed today",
        body="The computing lab is closed for maintenance.",
        type="Administrative",
        priority="High",
        status="Published",
        effective_date=now - timedelta(days=1),
        expiration_date=now,
    )
    noti.audiences.append(NotificationAudience(audience="common"))
    db.add(noti)
    db.commit()

    assert notification_service.get_active_notifications(db, "common", now=now) == []
    assert noti.is_active(now) is False

    just_before = now - timedelta(seconds=1)
    rows = notification_service.get_active_notifications(db, "common", now=just_before)
    assert [row.notification_id for row in rows] == [noti.notification_id]
    assert noti.is_active(just_before) is True


def test_get_notification_increments_view_count(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    created = _create(client, headers)

    first = client.get(f"/api/notifications/{created['notificationId']}")
    second = client.get(f"/api/notifications/{created['notificationId']}")
    assert first.status_code == 200
    assert first.json()["viewCount"] == 1
    assert second.json()["viewCount"] == 2


def test_get_missing_notification_returns_404(client):
    resp = client.get("/api/notifications/9999")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Notification not found"


def test_update_notification_merges_partial_payload(client, seed_users, events):
    headers = auth_headers(client, "admin@autoshed.test")
    created = _create(client, headers, priority="Low", tags=["exam"])

    resp = client.put(
        f"/api/notifications/{created['notificationId']}",
        json={"title": "Exam timetable updated", "notificationId": 777},
        headers=headers,
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["notificationId"] == created["notificationId"]
    assert data["title"] == "Exam timetable updated"
    assert data["priority"] == "Low"
    assert data["tags"] == ["exam"]
    assert data["lastModifiedBy"] == seed_users["admin"].user_id
    assert events.names() == ["newNotice", "updatedNotice"]


def test_update_notification_rechecks_date_order_without_writing(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    created = _create(client, headers, effectiveDate=_iso(-1), expirationDate=_iso(5))

    resp = client.put(
        f"/api/notifications/{created['notificationId']}",
        json={"title": "Should not be saved", "expirationDate": _iso(-2)},
        headers=headers,
    )
    assert resp.status_code == 400
    assert "expirationDate" in resp.json()["errors"]

    current = client.get(f"/api/notifications/{created['notificationId']}").json()
    assert current["title"] == created["title"]


def test_update_notification_replaces_audience(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    created = _create(client, headers, targetAudience=["students", "common"])

    resp = client.put(
        f"/api/notifications/{created['notificationId']}",
        json={"targetAudience": ["common", "examiners"]},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json()["targetAudience"] == ["examiners", "common"]


def test_update_missing_notification_returns_404(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    resp = client.put("/api/notifications/9999", json={"title": "Nothing here"}, headers=headers)
    assert resp.status_code == 404


def test_delete_notification(client, seed_users, events):
    headers = auth_headers(client, "admin@autoshed.test")
    created = _create(client, headers)

    resp = client.delete(f"/api/notifications/{created['notificationId']}", headers=headers)
    assert resp.status_code == 200
    assert client.get(f"/api/notifications/{created['notificationId']}").status_code == 404
    assert events.events[-1] == ("deletedNotice", {"id": created["notificationId"]})

    again = client.delete(f"/api/notifications/{created['notificationId']}", headers=headers)
    assert again.status_code == 404


def test_bulk_delete_ignores_unknown_ids(client, seed_users, events):
    headers = auth_headers(client, "admin@autoshed.test")
    first = _create(client, headers)
    second = _create(client, headers)
    keep = _create(client, headers)

    ids = [second["notificationId"], 9999, first["notificationId"]]
    resp = client.post("/api/notifications/bulk-delete", json={"ids": ids}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["deleted"] == 2
    assert events.events[-1] == ("deletedNotice", {"ids": sorted([first["notificationId"], second["notificationId"]])})

    remaining = client.get("/api/notifications").json()
    assert [row["notificationId"] for row in remaining] == [keep["notificationId"]]


def test_bulk_delete_of_unknown_ids_publishes_nothing(client, seed_users, events):
    headers = auth_headers(client, "admin@autoshed.test")
    resp = client.post("/api/notifications/bulk-delete", json={"ids": [9998, 9999]}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["deleted"] == 0
    assert events.events == []


def test_stats_overview(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    active = _create(client, headers, status="Published", effectiveDate=_iso(-1), expirationDate=_iso(3))
    _create(client, headers, status="Published", type="Event", effectiveDate=_iso(-1), expirationDate=_iso(30))
    _create(client, headers, status="Draft", type="Event")
    client.get(f"/api/notifications/{active['notificationId']}")

    resp = client.get("/api/notifications/stats/overview")
    assert resp.status_code == 200
    stats = resp.json()
    assert stats["totalNotifications"] == 3
    assert stats["activeNotifications"] == 2
    assert stats["expiringThisWeek"] == 1
    assert stats["byType"]["Academic"] == {"count": 1, "views": 1}
    assert stats["byType"]["Event"] == {"count": 2, "views": 0}


def test_publishing_with_email_schedules_delivery(client, seed_users, seed_students, seed_examiners, mailer):
    headers = auth_headers(client, "admin@autoshed.test")
    _create(client, headers, status="Published", notifyViaEmail=True, targetAudience=["students"])

    assert len(mailer.sent) == 1
    assert sorted(mailer.sent[0]["recipients"]) == ["dilini@autoshed.test", "sahan@autoshed.test"]
    assert mailer.sent[0]["subject"] == "Notification: Exam timetable released"


def test_draft_with_email_does_not_send_until_published(client, seed_users, seed_students, mailer):
    headers = auth_headers(client, "admin@autoshed.test")
    created = _create(client, headers, notifyViaEmail=True, targetAudience=["students"])
    assert mailer.sent == []

    resp = client.put(
        f"/api/notifications/{created['notificationId']}",
        json={"status": "Published"},
        headers=headers,
    )
    assert resp.status_code == 200
    assert len(mailer.sent) == 1

    client.put(f"/api/notifications/{created['notificationId']}", json={"priority": "High"}, headers=headers)
    assert len(mailer.sent) == 1


def test_send_email_to_common_audience(client, seed_users, seed_students, seed_examiners, mailer):
    headers = auth_headers(client, "admin@autoshed.test")
    created = _create(client, headers)

    resp = client.post(f"/api/notifications/{created['notificationId']}/send-email", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["recipientCount"] == 4
    assert len(mailer.sent[0]["recipients"]) == 4


def test_send_email_without_recipients(client, seed_users, mailer):
    headers = auth_headers(client, "admin@autoshed.test")
    created = _create(client, headers, targetAudience=["students"])

    resp = client.post(f"/api/notifications/{created['notificationId']}/send-email", headers=headers)
    assert resp.status_code == 400
    assert mailer.sent == []


def test_send_email_delivery_failure(client, seed_users, seed_examiners, mailer):
    mailer.result = False
    headers = auth_headers(client, "admin@autoshed.test")
    created = _create(client, headers, targetAudience=["examiners"])

    resp = client.post(f"/api/notifications/{created['notificationId']}/send-email", headers=headers)
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Failed to send emails"


def test_archiving_removes_notification_from_every_active_query(client, seed_users):
    headers = auth_headers(client, "admin@autoshed.test")
    created = _create(
        client,
        headers,
        title="Exam Hall Change",
        status="Published",
        effectiveDate=_iso(-1),
        targetAudience=["examiners"],
    )
    noti_id = created["notificationId"]
    assert [row["notificationId"] for row in client.get("/api/notifications/audience/examiners").json()] == [noti_id]
    assert client.get("/api/notifications/audience/students").json() == []

    resp = client.put(f"/api/notifications/{noti_id}", json={"status": "Archived"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "Archived"

    for audience in ("students", "examiners", "common"):
        assert client.get(f"/api/notifications/audience/{audience}").json() == []
    assert client.get("/api/notifications/active/common").json() == []


def test_update_with_empty_audience_is_rejected_and_not_written(client, seed_users, events):
    headers = auth_headers(client, "admin@autoshed.test")
    created = _create(client, headers, targetAudience=["students"])

    resp = client.put(
        f"/api/notifications/{created['notificationId']}",
        json={"targetAudience": [], "title": "Changed title"},
        headers=headers,
    )
    assert resp.status_code == 400
    assert "targetAudience" in resp.json()["errors"]
    assert events.names() == ["newNotice"]

    current = client.get(f"/api/notifications/{created['notificationId']}").json()
    assert current["title"] == created["title"]
    assert current["targetAudience"] == ["students"]


def test_send_email_for_missing_notification(client, seed_users, mailer):
    headers = auth_headers(client, "admin@autoshed.test")
    resp = client.post("/api/notifications/9999/send-email", headers=headers)
    assert resp.status_code == 404
    assert mailer.sent == []


def test_prepare_notification_email_collects_audience(client, db, seed_users, seed_examiners):
    headers = auth_headers(client, "admin@autoshed.test")
    created = _create(client, headers, targetAudience=["examiners"])

    recipients, subject, content = notification_service.prepare_notification_email(db, created["notificationId"])
    assert sorted(recipients) == ["ex1@autoshed.test", "ex2@autoshed.test"]
    assert subject == "Notification: Exam timetable released"
    assert "Exam timetable released" in content
