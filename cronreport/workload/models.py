"""CronJob descriptor structures in Kubernetes ``batch/v1`` wire format.

Field names are snake_case in Python and camelCase on the wire. Only the
subset of the CronJob schema the compiler fills in is modelled.
"""

from __future__ import annotations

import enum
import typing as typ

import msgspec

CRONJOB_API_VERSION = "batch/v1"
CRONJOB_KIND = "CronJob"


class ConcurrencyPolicy(enum.StrEnum):
    """How the platform treats a scheduled run while the previous one is live."""

    ALLOW = "Allow"
    FORBID = "Forbid"
    REPLACE = "Replace"


class _Wire(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Common options for every descriptor struct."""


class SecretKeySelector(_Wire):
    """Pointer to one key of a Secret in the job's namespace."""

    name: str
    key: str


class EnvVarSource(_Wire):
    """Indirect value source for an environment variable."""

    secret_key_ref: SecretKeySelector


class EnvVar(_Wire, omit_defaults=True):
    """Environment binding: either a literal ``value`` or a ``value_from`` ref."""

    name: str
    value: str | None = None
    value_from: EnvVarSource | None = None

    @property
    def is_secret_reference(self) -> bool:
        """Return True when the value is resolved from a Secret at run time."""
        return self.value_from is not None


class Container(_Wire):
    """Single container run by each scheduled Job."""

    name: str
    image: str
    command: tuple[str, ...]
    env: tuple[EnvVar, ...]


class PodSpec(_Wire):
    """Pod specification for the Job's one pod."""

    containers: tuple[Container, ...]
    restart_policy: typ.Literal["Never", "OnFailure"]


class PodTemplateSpec(_Wire):
    """Wrapper matching the ``template`` field of a JobSpec."""

    spec: PodSpec


class JobSpec(_Wire):
    """Spec of the Job created on every schedule tick."""

    template: PodTemplateSpec


class JobTemplateSpec(_Wire):
    """Wrapper matching the ``jobTemplate`` field of a CronJobSpec."""

    spec: JobSpec


class CronJobSpec(_Wire):
    """Schedule, overlap policy and job template of a CronJob."""

    schedule: str
    concurrency_policy: ConcurrencyPolicy
    job_template: JobTemplateSpec


class ObjectMeta(_Wire):
    """Metadata set by the compiler; the platform fills in everything else."""

    name: str


class CronJob(_Wire):
    """Compiled scheduled-workload descriptor, not yet submitted.

    The convenience properties expose the parts of the manifest callers
    usually inspect without walking the nested structure.
    """

    metadata: ObjectMeta
    spec: CronJobSpec
    api_version: str = CRONJOB_API_VERSION
    kind: str = CRONJOB_KIND

    @property
    def identity(self) -> str:
        """Return the CronJob name."""
        return self.metadata.name

    @property
    def schedule(self) -> str:
        """Return the cron expression."""
        return self.spec.schedule

    @property
    def concurrency_policy(self) -> ConcurrencyPolicy:
        """Return the overlap policy."""
        return self.spec.concurrency_policy

    @property
    def pod_spec(self) -> PodSpec:
        """Return the pod spec used by every spawned Job."""
        return self.spec.job_template.spec.template.spec

    @property
    def container(self) -> Container:
        """Return the single container of the pod template."""
        (container,) = self.pod_spec.containers
        return container

    @property
    def environment_bindings(self) -> tuple[EnvVar, ...]:
        """Return the container's environment bindings in declaration order."""
        return self.container.env

    def to_manifest(self) -> dict[str, typ.Any]:
        """Return the manifest as JSON-compatible builtins."""
        return msgspec.to_builtins(self)

    def encode(self) -> bytes:
        """Return the manifest encoded as JSON."""
        return msgspec.json.encode(self)


__all__ = [
    "CRONJOB_API_VERSION",
    "CRONJOB_KIND",
    "ConcurrencyPolicy",
    "Container",
    "CronJob",
    "CronJobSpec",
    "EnvVar",
    "EnvVarSource",
    "JobSpec",
    "JobTemplateSpec",
    "ObjectMeta",
    "PodSpec",
    "PodTemplateSpec",
    "SecretKeySelector",
]
