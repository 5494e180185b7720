"""Batch-job engine.

This package provides directory enumeration, eligibility filtering,
job planning, deterministic partitioning and the worker pool that runs
archive, extract and delete jobs in parallel.
"""

from dirbatch.batch.conditions import FilterResult, conditions_met, filter_deletable
from dirbatch.batch.enumerator import enumerate_entries, enumerate_request
from dirbatch.batch.models import (
    ARCHIVE_SUFFIX,
    Condition,
    ConditionKind,
    Entry,
    EnumerationRequest,
    ErrorPolicy,
    JobOutcome,
    JobSpec,
    OperationKind,
    RunReport,
)
from dirbatch.batch.partition import partition, resolve_worker_count
from dirbatch.batch.planner import (
    JobPlan,
    archive_destination,
    extract_destination,
    plan_archive_jobs,
    plan_delete_jobs,
    plan_extract_jobs,
)
from dirbatch.batch.pool import FailureCell, WorkerPool, run_jobs
from dirbatch.batch.progress import NullProgressSink, ProgressCounter, RichProgressSink

__all__ = [
    "ARCHIVE_SUFFIX",
    "Condition",
    "ConditionKind",
    "Entry",
    "EnumerationRequest",
    "ErrorPolicy",
    "FailureCell",
    "FilterResult",
    "JobOutcome",
    "JobPlan",
    "JobSpec",
    "NullProgressSink",
    "OperationKind",
    "ProgressCounter",
    "RichProgressSink",
    "RunReport",
    "WorkerPool",
    "archive_destination",
    "conditions_met",
    "enumerate_entries",
    "enumerate_request",
    "extract_destination",
    "filter_deletable",
    "partition",
    "plan_archive_jobs",
    "plan_delete_jobs",
    "plan_extract_jobs",
    "resolve_worker_count",
    "run_jobs",
]
