"""
Activity logging service.
Append-only record of domain events, newest first on read.
"""
from typing import Any, Dict, List, Optional

import structlog

from ..models.models import Activity, NoSubject, Subject
from ..storage.provider import StorageProvider


logger = structlog.get_logger(__name__)


def record_activity(
    store: StorageProvider,
    activity_type: str,
    description: str,
    actor_id: Optional[int] = None,
    subject: Optional[Subject] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Activity:
    """
    Append an activity entry.

    Args:
        store: Entity store
        activity_type: Event tag (job_created|job_status_changed|report_submitted|worker_clocked_in|worker_clocked_out)
        description: Human-readable, pre-rendered text
        actor_id: User who performed the action
        subject: JobRef, WorkerRef or NoSubject
        metadata: Free-form context

    Returns:
        Stored Activity
    """
    activity = store.create_activity(Activity(
        type=activity_type,
        description=description,
        user_id=actor_id,
        subject=subject or NoSubject(),
        metadata=metadata or {},
    ))
    logger.info(
        "activity_recorded",
        activity_id=activity.id,
        activity_type=activity_type,
        actor_id=actor_id,
        subject=activity.subject.kind,
        subject_id=activity.entity_id,
    )
    return activity


def get_activities(store: StorageProvider, limit: Optional[int] = None) -> List[Activity]:
    if limit is None:
        return store.get_all_activities()
    return store.get_recent_activities(limit)


def compute_diff(before: Dict, after: Dict) -> Dict:
    """
    Compute a diff between two dictionaries.

    Returns:
        Dict with before/after values for changed fields
    """
    diff = {}
    all_keys = set(before.keys()) | set(after.keys())

    for key in all_keys:
        before_val = before.get(key)
        after_val = after.get(key)

        if before_val != after_val:
            diff[key] = {
                "before": before_val,
                "after": after_val,
            }

    return diff
