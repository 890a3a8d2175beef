from datetime import datetime

from conftest import auth_headers, make_job

START = "2025-10-13T09:00:00"
END = "2025-10-13T11:00:00"


def job_payload(**overrides):
    payload = {
        "title": "Deep Clean – Dr. Okonkwo",
        "startTime": START,
        "endTime": END,
        "location": "7 Cathedral Close, NR1",
    }
    payload.update(overrides)
    return payload


def test_owner_creates_job(client, owner, staff, customer):
    response = client.post(
        "/jobs",
        json=job_payload(staffId=staff.id, customerId=customer.id),
        headers=auth_headers(owner),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["jobType"] == "Deep Clean"
    assert body["customerName"] == "Dr. Okonkwo"
    assert body["staffId"] == staff.id
    assert body["staffName"] == "Sarah Mitchell"
    assert body["status"] == "upcoming"


def test_create_rejects_end_before_start(client, owner):
    response = client.post("/jobs", json=job_payload(endTime=START, startTime=END), headers=auth_headers(owner))
    assert response.status_code == 422


def test_create_rejects_unknown_status(client, owner):
    response = client.post("/jobs", json=job_payload(status="lost"), headers=auth_headers(owner))
    assert response.status_code == 422


def test_create_rejects_unknown_staff(client, owner):
    response = client.post("/jobs", json=job_payload(staffId="nobody"), headers=auth_headers(owner))
    assert response.status_code == 422


def test_contractor_cannot_create_jobs(client, contractor):
    response = client.post("/jobs", json=job_payload(), headers=auth_headers(contractor))
    assert response.status_code == 403


def test_contractor_only_sees_own_jobs(client, db, owner, contractor):
    mine = make_job(db, contractor.id, datetime(2025, 10, 13, 9), datetime(2025, 10, 13, 10))
    theirs = make_job(db, owner.id, datetime(2025, 10, 13, 9), datetime(2025, 10, 13, 10))

    response = client.get("/jobs", headers=auth_headers(contractor))
    assert response.status_code == 200
    assert [job["id"] for job in response.json()] == [mine.id]

    assert client.get(f"/jobs/{theirs.id}", headers=auth_headers(contractor)).status_code == 404
    assert client.get(f"/jobs/{mine.id}", headers=auth_headers(contractor)).status_code == 200


def test_list_filters_by_range_and_status(client, db, owner):
    make_job(db, owner.id, datetime(2025, 10, 13, 9), datetime(2025, 10, 13, 10), status="completed")
    make_job(db, owner.id, datetime(2025, 10, 14, 9), datetime(2025, 10, 14, 10))

    response = client.get(
        "/jobs",
        params={"start": "2025-10-13T00:00:00", "end": "2025-10-14T00:00:00"},
        headers=auth_headers(owner),
    )
    assert len(response.json()) == 1

    response = client.get("/jobs", params={"status": "upcoming"}, headers=auth_headers(owner))
    assert [job["status"] for job in response.json()] == ["upcoming"]


def test_update_job(client, db, owner):
    job = make_job(db, owner.id, datetime(2025, 10, 13, 9), datetime(2025, 10, 13, 10))
    response = client.patch(
        f"/jobs/{job.id}",
        json={"status": "in_progress", "endTime": "2025-10-13T12:00:00"},
        headers=auth_headers(owner),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "in_progress"
    assert response.json()["endTime"].startswith("2025-10-13T12:00")


def test_update_checks_times_against_stored_values(client, db, owner):
    job = make_job(db, owner.id, datetime(2025, 10, 13, 9), datetime(2025, 10, 13, 10))
    response = client.patch(
        f"/jobs/{job.id}", json={"startTime": "2025-10-13T10:30:00"}, headers=auth_headers(owner)
    )
    assert response.status_code == 422


def test_delete_requires_permission(client, db, owner, staff):
    job = make_job(db, staff.id, datetime(2025, 10, 13, 9), datetime(2025, 10, 13, 10))
    assert client.delete(f"/jobs/{job.id}", headers=auth_headers(staff)).status_code == 403
    assert client.delete(f"/jobs/{job.id}", headers=auth_headers(owner)).status_code == 204
    assert client.get(f"/jobs/{job.id}", headers=auth_headers(owner)).status_code == 404


def test_jobs_require_authentication(client):
    assert client.get("/jobs").status_code == 401


def test_update_with_utc_offset_is_stored_as_utc(client, db, owner):
    job = make_job(db, owner.id, datetime(2025, 10, 13, 9), datetime(2025, 10, 13, 10))
    response = client.patch(
        f"/jobs/{job.id}", json={"startTime": "2025-10-13T08:00:00Z"}, headers=auth_headers(owner)
    )
    assert response.status_code == 200
    assert response.json()["startTime"] == "2025-10-13T08:00:00"


def test_update_with_offset_after_stored_end_is_rejected(client, db, owner):
    job = make_job(db, owner.id, datetime(2025, 10, 13, 9), datetime(2025, 10, 13, 10))
    response = client.patch(
        f"/jobs/{job.id}", json={"startTime": "2025-10-13T11:00:00+01:00"}, headers=auth_headers(owner)
    )
    # 10:00 UTC is not before the stored end
    assert response.status_code == 422


def test_create_with_mixed_offset_and_naive_times(client, owner):
    response = client.post(
        "/jobs",
        json=job_payload(startTime="2025-10-13T09:00:00Z", endTime=END),
        headers=auth_headers(owner),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["startTime"] == "2025-10-13T09:00:00"
    assert body["endTime"] == "2025-10-13T11:00:00"


def test_create_with_offsets_compares_in_utc(client, owner):
    response = client.post(
        "/jobs",
        json=job_payload(startTime="2025-10-13T09:00:00+02:00", endTime="2025-10-13T08:00:00Z"),
        headers=auth_headers(owner),
    )
    assert response.status_code == 201
    assert response.json()["startTime"] == "2025-10-13T07:00:00"
