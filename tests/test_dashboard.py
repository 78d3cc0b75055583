from datetime import datetime, timedelta, timezone

from workforce.models.models import Job, JobLocation
from workforce.services.dashboard import job_completion_series
from workforce.services.time_rules import trailing_months


def _completed_job(store, completed_at):
    return store.create_job(Job(
        title="Done",
        type="hvac",
        status="completed",
        location=JobLocation(address="1 A St", lat=0.0, lng=0.0),
        completed_at=completed_at,
    ))


def test_metrics_from_seed(login):
    resp = login("admin").get("/api/dashboard/metrics")
    assert resp.status_code == 200
    assert resp.json() == {
        "totalHRs": 1,
        "totalWorkers": 3,
        "jobsAssigned": 1,
        "jobsPending": 1,
        "activeJobs": 1,
        "completedToday": 0,
        "availableWorkers": 2,
        "pendingAssignment": 1,
    }


def test_completed_today_counts_completions(login, store):
    _completed_job(store, datetime.now(tz=timezone.utc))
    _completed_job(store, datetime.now(tz=timezone.utc) - timedelta(days=3))
    metrics = login("hr").get("/api/dashboard/metrics").json()
    assert metrics["completedToday"] == 1


def test_metrics_require_session(anon):
    assert anon.get("/api/dashboard/metrics").status_code == 401


def test_chart_groups_by_completion_month(store):
    now = datetime.now(tz=timezone.utc)
    _completed_job(store, now)
    _completed_job(store, now)
    _completed_job(store, now - timedelta(days=400))

    series = job_completion_series(store, months=6)
    assert len(series["labels"]) == 6
    assert series["data"][-1] == 2
    assert sum(series["data"]) == 2


def test_chart_endpoint_is_deterministic(login):
    client = login("admin")
    first = client.get("/api/dashboard/job-completion-chart").json()
    second = client.get("/api/dashboard/job-completion-chart").json()
    assert first == second
    assert first["data"] == [0] * 6
    assert len(client.get("/api/dashboard/job-completion-chart", params={"months": 12}).json()["labels"]) == 12


def test_trailing_months_wraps_year():
    from datetime import date
    assert trailing_months(3, today=date(2026, 2, 10)) == [(2025, 12), (2026, 1), (2026, 2)]
