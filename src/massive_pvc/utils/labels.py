"""Kubernetes label constants and helpers."""

from typing import Any


class MassivePVCLabels:
    """Labels applied to every object the sequence creates."""

    APP_KUBERNETES_MANAGED_BY = "app.kubernetes.io/managed-by"
    APP_KUBERNETES_COMPONENT = "app.kubernetes.io/component"

    MANAGER = "massive-pvc"

    @classmethod
    def claim_labels(cls) -> dict[str, str]:
        """Create labels for a storage claim."""
        return {
            cls.APP_KUBERNETES_MANAGED_BY: cls.MANAGER,
            cls.APP_KUBERNETES_COMPONENT: "storage-claim",
        }

    @classmethod
    def consumer_labels(cls) -> dict[str, str]:
        """Create labels for the consumer pod."""
        return {
            cls.APP_KUBERNETES_MANAGED_BY: cls.MANAGER,
            cls.APP_KUBERNETES_COMPONENT: "consumer",
        }

    @classmethod
    def is_managed(cls, labels: dict[str, Any] | None) -> bool:
        """Check if an object was created by massive-pvc."""
        if not labels:
            return False
        return labels.get(cls.APP_KUBERNETES_MANAGED_BY) == cls.MANAGER
