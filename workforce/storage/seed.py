"""
Demo data for a freshly started store.

Accounts:
  admin / admin123 (admin)
  hr.manager / hr123 (hr)
  john.doe, mike.smith, sarah.wilson / worker123 (worker)
"""
from datetime import timedelta

from ..auth.security import get_password_hash
from ..models.models import (
    Activity, GeoPoint, Job, JobLocation, JobRef, User, Worker, WorkerRef, utcnow,
)
from .provider import StorageProvider


def ensure_user(store: StorageProvider, username: str, password: str, role: str, name: str, email: str, phone: str) -> User:
    existing = store.get_user_by_username(username)
    if existing:
        return existing
    return store.create_user(User(
        username=username,
        password_hash=get_password_hash(password),
        role=role,
        name=name,
        email=email,
        phone=phone,
    ))


def load_demo_data(store: StorageProvider) -> None:
    now = utcnow()

    ensure_user(store, "admin", "admin123", "admin", "Admin User", "admin@company.com", "(555) 000-0001")
    hr = ensure_user(store, "hr.manager", "hr123", "hr", "HR Manager", "hr@company.com", "(555) 000-0002")
    john = ensure_user(store, "john.doe", "worker123", "worker", "John Doe", "john@company.com", "(555) 000-0003")
    mike = ensure_user(store, "mike.smith", "worker123", "worker", "Mike Smith", "mike@company.com", "(555) 000-0004")
    sarah = ensure_user(store, "sarah.wilson", "worker123", "worker", "Sarah Wilson", "sarah@company.com", "(555) 000-0005")

    if store.get_all_workers():
        return

    w1 = store.create_worker(Worker(
        user_id=john.id, specialty="plumbing", status="available",
        location=GeoPoint(lat=40.7128, lng=-74.0060), completed_jobs=24, rating="4.85",
    ))
    w2 = store.create_worker(Worker(
        user_id=mike.id, specialty="electrical", status="working",
        location=GeoPoint(lat=40.7589, lng=-73.9851), completed_jobs=31, rating="4.92",
    ))
    store.create_worker(Worker(
        user_id=sarah.id, specialty="hvac", status="available",
        location=GeoPoint(lat=40.7505, lng=-73.9934), completed_jobs=18, rating="4.67",
    ))

    job1 = store.create_job(Job(
        title="Emergency Pipe Repair",
        description="Kitchen sink is leaking, customer reports water damage. Need immediate attention.",
        type="plumbing",
        priority="urgent",
        status="assigned",
        location=JobLocation(address="123 Main St, Downtown", lat=40.7128, lng=-74.0060),
        assigned_to=w1.id,
        created_by=hr.id,
        customer_name="Mrs. Johnson",
        customer_phone="(555) 123-4567",
        estimated_duration=2,
        scheduled_at=now + timedelta(hours=2),
        created_at=now - timedelta(hours=2),
    ))
    job2 = store.create_job(Job(
        title="Electrical Panel Upgrade",
        description="Replace old electrical panel with modern circuit breakers.",
        type="electrical",
        priority="normal",
        status="in_progress",
        location=JobLocation(address="456 Oak Ave, Uptown", lat=40.7589, lng=-73.9851),
        assigned_to=w2.id,
        created_by=hr.id,
        customer_name="Mr. Williams",
        customer_phone="(555) 234-5678",
        estimated_duration=4,
        started_at=now - timedelta(hours=1),
        created_at=now - timedelta(hours=4),
    ))
    store.create_job(Job(
        title="HVAC System Maintenance",
        description="Regular maintenance check for office building HVAC system.",
        type="hvac",
        priority="normal",
        status="pending",
        location=JobLocation(address="789 Business Blvd, Business District", lat=40.7505, lng=-73.9934),
        created_by=hr.id,
        customer_name="ABC Corporation",
        customer_phone="(555) 345-6789",
        estimated_duration=3,
        scheduled_at=now + timedelta(days=1),
        created_at=now - timedelta(minutes=30),
    ))

    store.create_activity(Activity(
        type="job_assigned",
        description=f"{hr.name} assigned plumbing job to {john.name}",
        user_id=hr.id,
        subject=JobRef(id=job1.id),
        created_at=now - timedelta(minutes=30),
    ))
    store.create_activity(Activity(
        type="job_started",
        description=f"{mike.name} started electrical work",
        user_id=mike.id,
        subject=JobRef(id=job2.id),
        created_at=now - timedelta(minutes=45),
    ))
    store.create_activity(Activity(
        type="worker_clocked_in",
        description=f"{john.name} clocked in",
        user_id=john.id,
        subject=WorkerRef(id=w1.id),
        created_at=now - timedelta(hours=3),
    ))
