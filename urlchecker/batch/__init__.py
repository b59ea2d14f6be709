"""Batch package: grouped probing, classification & export."""

from urlchecker.batch.classify import Bucket, group_by_host, partition, status_counts
from urlchecker.batch.export import to_csv, to_text
from urlchecker.batch.orchestrator import BatchProgress, BatchRun, CancellationToken, run_batch

__all__ = [
    "run_batch",
    "BatchRun",
    "BatchProgress",
    "CancellationToken",
    "Bucket",
    "partition",
    "status_counts",
    "group_by_host",
    "to_csv",
    "to_text",
]
