from datetime import datetime, timedelta

from conftest import auth_headers, make_job

from app import config


def test_health_reports_features(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["features"]["database"] is True
    assert body["database"]["connected"] is True


def test_health_without_database(client, monkeypatch):
    monkeypatch.setitem(config.FEATURES, "database", False)
    body = client.get("/health").json()
    assert body["features"]["database"] is False
    assert "database" not in body


def test_dashboard_stats(client, db, owner, contractor, customer):
    now = datetime.now().replace(minute=0, second=0, microsecond=0)
    make_job(db, owner.id, now, now + timedelta(hours=1), status="completed")
    make_job(db, contractor.id, now, now + timedelta(hours=2))
    make_job(db, owner.id, now + timedelta(days=40), now + timedelta(days=40, hours=1), status="cancelled")

    body = client.get("/dashboard/stats", headers=auth_headers(owner)).json()
    assert body["total"] == 3
    assert body["byStatus"] == {"completed": 1, "in_progress": 0, "upcoming": 1, "cancelled": 1}
    assert body["today"] == 2
    assert body["thisWeek"] == 2
    assert body["customers"] == 1


def test_dashboard_stats_are_scoped_for_contractors(client, db, owner, contractor):
    now = datetime.now()
    make_job(db, owner.id, now, now + timedelta(hours=1))
    make_job(db, contractor.id, now, now + timedelta(hours=1))

    body = client.get("/dashboard/stats", headers=auth_headers(contractor)).json()
    assert body["total"] == 1
    assert body["customers"] == 0
