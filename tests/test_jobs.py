from tests.conftest import job_id_by_title, worker_id_for


NEW_JOB = {
    "title": "Replace Water Heater",
    "description": "50 gallon unit in basement",
    "type": "plumbing",
    "priority": "high",
    "location": {"address": "12 Elm St", "lat": 40.71, "lng": -74.0},
    "customerName": "Ms. Rivera",
    "customerPhone": "(555) 999-0000",
    "estimatedDuration": 3,
}


def _find(jobs, job_id):
    return next(j for j in jobs if j["id"] == job_id)


def test_create_job_round_trip(login):
    client = login("hr")
    resp = client.post("/api/jobs", json=NEW_JOB)
    assert resp.status_code == 200
    created = resp.json()
    assert isinstance(created["id"], int)
    assert created["createdAt"]
    assert created["status"] == "pending"
    assert created["assignedTo"] is None
    for key, value in NEW_JOB.items():
        assert created[key] == value

    listed = _find(client.get("/api/jobs").json(), created["id"])
    for key, value in NEW_JOB.items():
        assert listed[key] == value
    assert listed["creator"]["username"] == "hr.manager"
    assert listed["worker"] is None

    fetched = client.get(f"/api/jobs/{created['id']}").json()
    assert fetched["createdAt"] == created["createdAt"]


def test_create_job_records_activity(login, store):
    client = login("admin")
    job = client.post("/api/jobs", json=NEW_JOB).json()
    latest = store.get_recent_activities(1)[0]
    assert latest.type == "job_created"
    assert latest.subject.kind == "job"
    assert latest.subject.id == job["id"]
    assert latest.metadata == {"jobType": "plumbing", "priority": "high"}
    assert latest.description == "Admin User created job: Replace Water Heater"


def test_worker_cannot_create_job(login):
    client = login("john")
    resp = client.post("/api/jobs", json=NEW_JOB)
    assert resp.status_code == 403
    assert resp.json() == {"message": "Forbidden"}


def test_create_job_requires_session(anon):
    assert anon.post("/api/jobs", json=NEW_JOB).status_code == 401


def test_create_job_invalid_data(login):
    client = login("hr")
    resp = client.post("/api/jobs", json={"title": "No type"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid job data"}


def test_assign_job_shows_worker_with_user(login, store):
    client = login("hr")
    job_id = job_id_by_title(store, "HVAC System Maintenance")
    sarah = worker_id_for(store, "sarah.wilson")

    resp = client.patch(f"/api/jobs/{job_id}", json={"status": "assigned", "assignedTo": sarah})
    assert resp.status_code == 200
    assert resp.json()["assignedTo"] == sarah

    listed = _find(client.get("/api/jobs").json(), job_id)
    assert listed["worker"]["id"] == sarah
    assert listed["worker"]["user"]["name"] == "Sarah Wilson"

    activity = store.get_recent_activities(1)[0]
    assert activity.type == "job_status_changed"
    assert activity.description == "HR Manager assigned job to Sarah Wilson"
    assert activity.metadata["oldStatus"] == "pending"
    assert activity.metadata["newStatus"] == "assigned"


def test_assign_without_worker_is_rejected(login, store):
    client = login("hr")
    job_id = job_id_by_title(store, "HVAC System Maintenance")
    resp = client.patch(f"/api/jobs/{job_id}", json={"status": "assigned"})
    assert resp.status_code == 400
    assert store.get_job(job_id).status == "pending"


def test_assign_unknown_worker_is_rejected(login, store):
    client = login("hr")
    job_id = job_id_by_title(store, "HVAC System Maintenance")
    resp = client.patch(f"/api/jobs/{job_id}", json={"status": "assigned", "assignedTo": 9999})
    assert resp.status_code == 400
    assert store.get_job(job_id).assigned_to is None


def test_full_lifecycle_narration_and_counter(login, store):
    client = login("john")
    job_id = job_id_by_title(store, "Emergency Pipe Repair")
    john = worker_id_for(store, "john.doe")
    before = store.get_worker(john).completed_jobs

    resp = client.patch(f"/api/jobs/{job_id}", json={"status": "in_progress", "startedAt": "2026-10-19T09:00:00Z"})
    assert resp.status_code == 200
    assert resp.json()["startedAt"].startswith("2026-10-19T09:00:00")
    assert store.get_recent_activities(1)[0].description == "John Doe started job: Emergency Pipe Repair"

    resp = client.patch(f"/api/jobs/{job_id}", json={"status": "completed", "completedAt": "2026-10-19T11:00:00Z"})
    assert resp.status_code == 200
    assert store.get_recent_activities(1)[0].description == "John Doe completed job: Emergency Pipe Repair"
    assert store.get_worker(john).completed_jobs == before + 1


def test_illegal_transition_is_rejected(login, store):
    client = login("hr")
    job_id = job_id_by_title(store, "Electrical Panel Upgrade")
    assert client.patch(f"/api/jobs/{job_id}", json={"status": "completed"}).status_code == 200
    activities_before = len(store.get_all_activities())

    resp = client.patch(f"/api/jobs/{job_id}", json={"status": "pending"})
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid status transition from completed to pending"}
    assert store.get_job(job_id).status == "completed"
    assert len(store.get_all_activities()) == activities_before


def test_cancel_clears_assignee_without_activity(login, store):
    client = login("hr")
    job_id = job_id_by_title(store, "Emergency Pipe Repair")
    activities_before = len(store.get_all_activities())

    resp = client.patch(f"/api/jobs/{job_id}", json={"status": "cancelled"})
    assert resp.status_code == 200
    assert resp.json()["assignedTo"] is None
    assert len(store.get_all_activities()) == activities_before


def test_patch_without_status_change_is_merged(login, store):
    client = login("hr")
    job_id = job_id_by_title(store, "HVAC System Maintenance")
    resp = client.patch(f"/api/jobs/{job_id}", json={"priority": "urgent", "customerPhone": "(555) 111-2222"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["priority"] == "urgent"
    assert body["customerPhone"] == "(555) 111-2222"
    assert body["title"] == "HVAC System Maintenance"


def test_patch_null_status_is_invalid(login, store):
    client = login("hr")
    job_id = job_id_by_title(store, "HVAC System Maintenance")
    resp = client.patch(f"/api/jobs/{job_id}", json={"status": None})
    assert resp.status_code == 400
    assert store.get_job(job_id).status == "pending"


def test_patch_unknown_job_is_404_and_store_unchanged(login, store):
    client = login("hr")
    snapshot = {j.id: j.to_dict() for j in store.get_all_jobs()}
    resp = client.patch("/api/jobs/99999", json={"status": "cancelled"})
    assert resp.status_code == 404
    assert resp.json() == {"message": "Job not found"}
    assert {j.id: j.to_dict() for j in store.get_all_jobs()} == snapshot


def test_filter_jobs_by_status_and_worker(login, store):
    client = login("admin")
    pending = client.get("/api/jobs", params={"status": "pending"}).json()
    assert [j["title"] for j in pending] == ["HVAC System Maintenance"]

    mike = worker_id_for(store, "mike.smith")
    mikes = client.get("/api/jobs", params={"workerId": mike}).json()
    assert [j["title"] for j in mikes] == ["Electrical Panel Upgrade"]


def test_my_jobs_for_worker(login):
    client = login("john")
    resp = client.get("/api/jobs/my")
    assert resp.status_code == 200
    assert [j["title"] for j in resp.json()] == ["Emergency Pipe Repair"]


def test_my_jobs_forbidden_for_hr(login):
    assert login("hr").get("/api/jobs/my").status_code == 403


def test_get_unknown_job(login):
    assert login("admin").get("/api/jobs/424242").status_code == 404
