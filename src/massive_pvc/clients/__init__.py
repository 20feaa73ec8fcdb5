"""Kubernetes client infrastructure for massive-pvc."""

from massive_pvc.clients.base import (
    FOREGROUND,
    K8sClient,
    get_k8s_client,
)

__all__ = [
    "FOREGROUND",
    "K8sClient",
    "get_k8s_client",
]
