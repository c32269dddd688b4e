"""Cluster access: credential loading, the connection handle and submission."""

from __future__ import annotations

from .connection import ClusterConnection, ClusterCredentials, connect
from .errors import (
    AlreadyExistsError,
    ClusterConnectionError,
    ClusterResponseShapeError,
    ForbiddenError,
    KubeconfigError,
    SubmissionError,
    SubmissionRejectedError,
    SubmissionTimeoutError,
    TransientServerError,
    WorkloadNotFoundError,
)
from .kubeconfig import (
    build_credentials,
    default_kubeconfig_path,
    load_incluster_credentials,
    load_kubeconfig,
)
from .submitter import (
    WorkloadReference,
    cronjobs_path,
    lookup_workload,
    submit_workload,
)

__all__ = [
    "AlreadyExistsError",
    "ClusterConnection",
    "ClusterConnectionError",
    "ClusterCredentials",
    "ClusterResponseShapeError",
    "ForbiddenError",
    "KubeconfigError",
    "SubmissionError",
    "SubmissionRejectedError",
    "SubmissionTimeoutError",
    "TransientServerError",
    "WorkloadNotFoundError",
    "WorkloadReference",
    "build_credentials",
    "connect",
    "cronjobs_path",
    "default_kubeconfig_path",
    "load_incluster_credentials",
    "load_kubeconfig",
    "lookup_workload",
    "submit_workload",
]
