"""The five-step storage claim lifecycle."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from massive_pvc.clients.base import FOREGROUND
from massive_pvc.console import Confirm, no_confirm
from massive_pvc.models import (
    DEFAULT_CLAIM_PREFIX,
    DEFAULT_CONSUMER_NAME,
    DEFAULT_NAMESPACE,
    ConsumerDescriptor,
    StorageClaimDescriptor,
    claim_names,
)
from massive_pvc.utils.labels import MassivePVCLabels

if TYPE_CHECKING:
    from massive_pvc.clients.base import K8sClient
    from massive_pvc.config import MassivePVCConfig

logger = logging.getLogger(__name__)


class Sequencer:
    """Creates claims, mounts them in one pod, then tears everything down.

    Every step issues its requests one after another and lets the first
    ExternalCallError propagate; nothing already created is cleaned up.

    Args:
        k8s: Client used for every request.
        namespace: Namespace holding the claims and the consumer pod.
        claim_prefix: Claim names are ``<claim_prefix><index>``.
        claim_size: Requested capacity per claim.
        consumer_name: Name of the consumer pod and its container.
        consumer_image: Image of the consumer container.
        sleep_seconds: How long the consumer container sleeps.
    """

    def __init__(
        self,
        k8s: K8sClient,
        namespace: str = DEFAULT_NAMESPACE,
        claim_prefix: str = DEFAULT_CLAIM_PREFIX,
        claim_size: str = "1Gi",
        consumer_name: str = DEFAULT_CONSUMER_NAME,
        consumer_image: str = "ubuntu:latest",
        sleep_seconds: int = 3600,
    ) -> None:
        self.k8s = k8s
        self.namespace = namespace
        self.claim_prefix = claim_prefix
        self.claim_size = claim_size
        self.consumer_name = consumer_name
        self.consumer_image = consumer_image
        self.sleep_seconds = sleep_seconds

    @classmethod
    def from_config(cls, k8s: K8sClient, config: MassivePVCConfig) -> Sequencer:
        return cls(
            k8s,
            namespace=config.namespace,
            claim_prefix=config.claim_prefix,
            claim_size=config.claim_size,
            consumer_name=config.consumer_name,
            consumer_image=config.consumer_image,
            sleep_seconds=config.sleep_seconds,
        )

    def claim(self, index: int) -> StorageClaimDescriptor:
        return StorageClaimDescriptor.for_index(
            index,
            prefix=self.claim_prefix,
            namespace=self.namespace,
            size=self.claim_size,
        )

    def consumer(self, start: int, end: int) -> ConsumerDescriptor:
        return ConsumerDescriptor.for_range(
            start,
            end,
            prefix=self.claim_prefix,
            sleep_seconds=self.sleep_seconds,
            name=self.consumer_name,
            namespace=self.namespace,
            image=self.consumer_image,
        )

    def create_claims(self, start: int, end: int) -> list[str]:
        """Create one claim per index in ``[start, end]``."""
        created = []
        for index in range(start, end + 1):
            result = self.k8s.create_pvc(self.claim(index).to_k8s(), self.namespace)
            name = result.metadata.name
            print(f'Created pvc "{name}".')
            created.append(name)
        logger.debug(f"Created {len(created)} claims in {self.namespace}")
        return created

    def list_claims(self) -> list[str]:
        """Print and return the name of every claim in the namespace."""
        print(f'Listing pvc in namespace "{self.namespace}":')
        pvcs = self.k8s.list_pvcs(self.namespace)
        names = [pvc.metadata.name for pvc in pvcs]
        for name in names:
            print(f" pvc {name}")
        managed = sum(1 for pvc in pvcs if MassivePVCLabels.is_managed(pvc.metadata.labels))
        logger.info(f"{managed} of {len(names)} claims in {self.namespace} are managed by massive-pvc")
        return names

    def create_consumer(self, start: int, end: int) -> str:
        """Create the pod mounting every claim in ``[start, end]``."""
        descriptor = self.consumer(start, end)
        logger.debug(f"Consumer {descriptor.name} mounts {len(descriptor.mounts)} claims")
        result = self.k8s.create_pod(descriptor.to_k8s(), self.namespace)
        name = result.metadata.name
        print(f'Created pod "{name}".')
        return name

    def delete_consumer(self) -> None:
        self.k8s.delete_pod(
            self.consumer_name, self.namespace, propagation_policy=FOREGROUND
        )

    def delete_claims(self, start: int, end: int) -> None:
        for name in claim_names(start, end, self.claim_prefix):
            self.k8s.delete_pvc(name, self.namespace, propagation_policy=FOREGROUND)
        logger.debug(f"Deleted claims {start}..{end} in {self.namespace}")

    def run(self, start: int, end: int, confirm: Confirm = no_confirm) -> None:
        """Run all five steps, calling ``confirm`` between consecutive ones."""
        print(f"start {start} end {end}")

        print("Creating pvc...")
        self.create_claims(start, end)

        confirm()
        self.list_claims()

        confirm()
        print("Creating pod...")
        self.create_consumer(start, end)

        confirm()
        print("Deleting pod...")
        self.delete_consumer()
        print("Deleted pod.")

        confirm()
        print("Deleting pvc...")
        self.delete_claims(start, end)
        print("Deleted pvc.")
