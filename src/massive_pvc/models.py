"""Pydantic models for the objects a massive-pvc run creates."""

from enum import Enum

from kubernetes import client
from pydantic import BaseModel, Field

from massive_pvc.utils.labels import MassivePVCLabels

DEFAULT_NAMESPACE = "default"
DEFAULT_CLAIM_PREFIX = "pvc-"
DEFAULT_CONSUMER_NAME = "hold-massive-pvcs"


class StorageAccessMode(str, Enum):
    """PVC access modes."""

    READ_WRITE_ONCE = "ReadWriteOnce"
    READ_ONLY_MANY = "ReadOnlyMany"
    READ_WRITE_MANY = "ReadWriteMany"
    READ_WRITE_ONCE_POD = "ReadWriteOncePod"


class VolumeMode(str, Enum):
    """PVC volume modes."""

    FILESYSTEM = "Filesystem"
    BLOCK = "Block"


class PullPolicy(str, Enum):
    """Container image pull policies."""

    ALWAYS = "Always"
    IF_NOT_PRESENT = "IfNotPresent"
    NEVER = "Never"


def claim_name(index: int, prefix: str = DEFAULT_CLAIM_PREFIX) -> str:
    """Name of the storage claim for ``index``."""
    return f"{prefix}{index}"


def claim_names(start: int, end: int, prefix: str = DEFAULT_CLAIM_PREFIX) -> list[str]:
    """Names for every index in ``[start, end]``; empty when start > end."""
    return [claim_name(i, prefix) for i in range(start, end + 1)]


class StorageClaimDescriptor(BaseModel):
    """A single PersistentVolumeClaim to create."""

    name: str = Field(..., description="PVC name")
    namespace: str = Field(DEFAULT_NAMESPACE, description="Namespace")
    access_mode: StorageAccessMode = Field(
        StorageAccessMode.READ_WRITE_ONCE, description="Access mode"
    )
    size: str = Field("1Gi", description="Requested capacity")
    volume_mode: VolumeMode = Field(VolumeMode.FILESYSTEM, description="Volume mode")
    labels: dict[str, str] = Field(
        default_factory=MassivePVCLabels.claim_labels, description="Object labels"
    )

    @classmethod
    def for_index(
        cls, index: int, prefix: str = DEFAULT_CLAIM_PREFIX, **kwargs: object
    ) -> "StorageClaimDescriptor":
        return cls(name=claim_name(index, prefix), **kwargs)  # type: ignore[arg-type]

    def to_k8s(self) -> client.V1PersistentVolumeClaim:
        return client.V1PersistentVolumeClaim(
            api_version="v1",
            kind="PersistentVolumeClaim",
            metadata=client.V1ObjectMeta(
                name=self.name,
                namespace=self.namespace,
                labels=dict(self.labels),
            ),
            spec=client.V1PersistentVolumeClaimSpec(
                access_modes=[self.access_mode.value],
                resources=client.V1VolumeResourceRequirements(
                    requests={"storage": self.size},
                ),
                volume_mode=self.volume_mode.value,
            ),
        )


class VolumeMountSpec(BaseModel):
    """One claim mounted into the consumer container."""

    claim_name: str
    mount_path: str

    @classmethod
    def for_claim(cls, name: str) -> "VolumeMountSpec":
        return cls(claim_name=name, mount_path=f"/{name}")


class ConsumerDescriptor(BaseModel):
    """The pod that mounts every storage claim.

    Each claim becomes a pod volume of the same name, mounted at
    ``/<claim name>`` in the single container.
    """

    name: str = Field(DEFAULT_CONSUMER_NAME, description="Pod and container name")
    namespace: str = Field(DEFAULT_NAMESPACE, description="Namespace")
    image: str = Field("ubuntu:latest", description="Container image")
    image_pull_policy: PullPolicy = Field(PullPolicy.IF_NOT_PRESENT)
    command: list[str] = Field(default_factory=lambda: ["/bin/sleep", "3600"])
    privileged: bool = Field(True, description="Run the container privileged")
    mounts: list[VolumeMountSpec] = Field(default_factory=list)
    labels: dict[str, str] = Field(default_factory=MassivePVCLabels.consumer_labels)

    @classmethod
    def for_range(
        cls,
        start: int,
        end: int,
        prefix: str = DEFAULT_CLAIM_PREFIX,
        sleep_seconds: int = 3600,
        **kwargs: object,
    ) -> "ConsumerDescriptor":
        """Build a consumer mounting every claim in ``[start, end]``."""
        mounts = [VolumeMountSpec.for_claim(n) for n in claim_names(start, end, prefix)]
        return cls(
            mounts=mounts,
            command=["/bin/sleep", str(sleep_seconds)],
            **kwargs,  # type: ignore[arg-type]
        )

    @property
    def mounted_claims(self) -> list[str]:
        return [m.claim_name for m in self.mounts]

    def to_k8s(self) -> client.V1Pod:
        volumes = [
            client.V1Volume(
                name=m.claim_name,
                persistent_volume_claim=client.V1PersistentVolumeClaimVolumeSource(
                    claim_name=m.claim_name,
                ),
            )
            for m in self.mounts
        ]
        volume_mounts = [
            client.V1VolumeMount(name=m.claim_name, mount_path=m.mount_path)
            for m in self.mounts
        ]
        container = client.V1Container(
            name=self.name,
            image=self.image,
            image_pull_policy=self.image_pull_policy.value,
            command=list(self.command),
            security_context=client.V1SecurityContext(privileged=self.privileged),
            volume_mounts=volume_mounts or None,
        )
        return client.V1Pod(
            api_version="v1",
            kind="Pod",
            metadata=client.V1ObjectMeta(
                name=self.name,
                namespace=self.namespace,
                labels=dict(self.labels),
            ),
            spec=client.V1PodSpec(
                containers=[container],
                volumes=volumes or None,
            ),
        )
