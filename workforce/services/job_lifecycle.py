"""
Job lifecycle service.
Guards job status transitions, keeps the assignee invariant, and narrates
status changes into the activity log.

pending -> assigned -> in_progress -> completed, with cancelled reachable
from every non-terminal status and assigned -> pending to unassign.
"""
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional

import structlog

from ..models.models import Job, JobRef
from ..storage.provider import StorageProvider
from .audit import compute_diff, record_activity


logger = structlog.get_logger(__name__)

ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    "pending": frozenset({"assigned", "cancelled"}),
    "assigned": frozenset({"pending", "in_progress", "cancelled"}),
    "in_progress": frozenset({"completed", "cancelled"}),
    "completed": frozenset(),
    "cancelled": frozenset(),
}

# Only these statuses may carry an assignee
ASSIGNEE_STATUSES = frozenset({"assigned", "in_progress", "completed"})
UNASSIGNING_STATUSES = frozenset({"pending", "cancelled"})


@dataclass
class JobOutcome:
    job: Optional[Job] = None
    error: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _reject(error: str, message: str) -> JobOutcome:
    return JobOutcome(error=error, message=message)


def can_transition(old_status: str, new_status: str) -> bool:
    if old_status == new_status:
        return True
    return new_status in ALLOWED_TRANSITIONS.get(old_status, frozenset())


def check_assignment(store: StorageProvider, status: str, assignee: Optional[int]) -> Optional[JobOutcome]:
    """Return a rejection when ``assignee`` is not valid for ``status``, else None."""
    if assignee is None:
        if status == "assigned":
            return _reject("assignee_required", "assignedTo is required to assign a job")
        return None
    if status not in ASSIGNEE_STATUSES:
        return _reject("assignee_not_allowed", f"A {status} job cannot have an assigned worker")
    if store.get_worker(assignee) is None:
        return _reject("unknown_worker", "Assigned worker does not exist")
    return None


def describe_status_change(store: StorageProvider, job: Job, new_status: str, actor_name: str) -> str:
    if new_status == "assigned":
        worker = store.get_worker(job.assigned_to) if job.assigned_to is not None else None
        worker_user = store.get_user(worker.user_id) if worker else None
        return f"{actor_name} assigned job to {worker_user.name if worker_user else 'Unknown'}"
    if new_status == "in_progress":
        return f"{actor_name} started job: {job.title}"
    if new_status == "completed":
        return f"{actor_name} completed job: {job.title}"
    return ""


def create_job(store: StorageProvider, job: Job, actor_id: int, actor_name: str) -> JobOutcome:
    with store.transaction():
        rejection = check_assignment(store, job.status, job.assigned_to)
        if rejection:
            return rejection
        created = store.create_job(job.model_copy(update={"created_by": actor_id}))
        record_activity(
            store,
            "job_created",
            f"{actor_name} created job: {created.title}",
            actor_id=actor_id,
            subject=JobRef(id=created.id),
            metadata={"jobType": created.type, "priority": created.priority},
        )
    logger.info("job_created", job_id=created.id, actor_id=actor_id, status=created.status)
    return JobOutcome(job=created)


def update_job(store: StorageProvider, job_id: int, updates: dict, actor_id: int, actor_name: str) -> JobOutcome:
    """
    Apply a partial update to a job.

    Timestamps (started_at, completed_at) are taken from the caller as-is.
    Rejections leave the store unchanged.
    """
    with store.transaction():
        job = store.get_job(job_id)
        if job is None:
            return _reject("not_found", "Job not found")

        old_status = job.status
        new_status = updates.get("status") or old_status
        if not can_transition(old_status, new_status):
            logger.warning("job_transition_rejected", job_id=job_id, old_status=old_status, new_status=new_status)
            return _reject("invalid_transition", f"Invalid status transition from {old_status} to {new_status}")

        fields = {k: v for k, v in updates.items() if k not in ("id", "created_at", "created_by")}
        if new_status in UNASSIGNING_STATUSES and new_status != old_status:
            fields["assigned_to"] = None
        assignee = fields["assigned_to"] if "assigned_to" in fields else job.assigned_to
        rejection = check_assignment(store, new_status, assignee)
        if rejection:
            return rejection

        before = job.to_dict()
        updated = store.update_job(job_id, fields)

        if new_status == "completed" and old_status != "completed" and updated.assigned_to is not None:
            worker = store.get_worker(updated.assigned_to)
            if worker:
                store.update_worker(worker.id, {"completed_jobs": worker.completed_jobs + 1})

        reassigned = new_status == "assigned" and assignee != job.assigned_to
        if "status" in updates and (new_status != old_status or reassigned):
            description = describe_status_change(store, updated, new_status, actor_name)
            if description:
                record_activity(
                    store,
                    "job_status_changed",
                    description,
                    actor_id=actor_id,
                    subject=JobRef(id=updated.id),
                    metadata={
                        "oldStatus": old_status,
                        "newStatus": new_status,
                        "changes": compute_diff(before, updated.to_dict()),
                    },
                )

    if new_status != old_status:
        logger.info("job_transitioned", job_id=job_id, old_status=old_status, new_status=new_status, actor_id=actor_id)
    return JobOutcome(job=updated)
