"""Kubernetes client wrapper for massive-pvc."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from kubernetes import client
from kubernetes import config as kube_config
from kubernetes.client import ApiException
from kubernetes.config import ConfigException
from urllib3.exceptions import HTTPError

from massive_pvc.utils.errors import (
    AuthenticationError,
    ConfigurationError,
    ExternalCallError,
    NotFoundError,
    ResourceExistsError,
)

if TYPE_CHECKING:
    from massive_pvc.config import MassivePVCConfig

logger = logging.getLogger(__name__)

FOREGROUND = "Foreground"

PVC_KIND = "PersistentVolumeClaim"
POD_KIND = "Pod"


def _api_reason(e: ApiException) -> str:
    """Pull the Status message out of an API error body when there is one."""
    if e.body:
        try:
            body = json.loads(e.body)
        except (TypeError, ValueError):
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return e.reason or f"HTTP {e.status}"


@contextmanager
def _api_call(
    operation: str,
    resource_type: str,
    name: str | None = None,
    namespace: str | None = None,
) -> Iterator[None]:
    """Translate client failures of a single request into ExternalCallError."""
    try:
        yield
    except ApiException as e:
        reason = _api_reason(e)
        error_class: type[ExternalCallError]
        if e.status == 404:
            error_class = NotFoundError
        elif e.status == 409:
            error_class = ResourceExistsError
        elif e.status in (401, 403):
            error_class = AuthenticationError
        else:
            error_class = ExternalCallError
        raise error_class(
            operation, resource_type, name, namespace, reason=reason, status=e.status
        ) from e
    except HTTPError as e:
        raise ExternalCallError(
            operation, resource_type, name, namespace, reason=str(e)
        ) from e


class K8sClient:
    """Owns one isolated ApiClient and the CoreV1Api built on it.

    The connection is established lazily on first use so that building
    the client never touches the network or the filesystem.
    """

    def __init__(self, config: MassivePVCConfig) -> None:
        self._config = config
        self._api_client: client.ApiClient | None = None
        self._core_v1: client.CoreV1Api | None = None

    @property
    def is_connected(self) -> bool:
        return self._api_client is not None

    def connect(self) -> None:
        """Load credentials and build the API client."""
        if self._api_client is not None:
            return

        try:
            if self._config.use_in_cluster():
                logger.debug("Loading in-cluster configuration")
                configuration = client.Configuration()
                kube_config.load_incluster_config(client_configuration=configuration)
                api_client = client.ApiClient(configuration)
            else:
                kubeconfig = self._config.effective_kubeconfig_path
                logger.debug(f"Loading kubeconfig from {kubeconfig}")
                api_client = kube_config.new_client_from_config(
                    config_file=str(kubeconfig),
                    context=self._config.kubeconfig_context,
                )
        except (ConfigException, OSError) as e:
            raise ConfigurationError(f"Failed to load Kubernetes configuration: {e}") from e

        self._api_client = api_client
        self._core_v1 = client.CoreV1Api(api_client)

    @property
    def core_v1(self) -> client.CoreV1Api:
        if self._core_v1 is None:
            self.connect()
        assert self._core_v1 is not None
        return self._core_v1

    def close(self) -> None:
        if self._api_client is not None:
            self._api_client.close()
        self._api_client = None
        self._core_v1 = None

    # PersistentVolumeClaims

    def create_pvc(
        self, body: client.V1PersistentVolumeClaim, namespace: str
    ) -> client.V1PersistentVolumeClaim:
        name = body.metadata.name
        logger.debug(f"Creating {PVC_KIND} {namespace}/{name}")
        with _api_call("create", PVC_KIND, name, namespace):
            return self.core_v1.create_namespaced_persistent_volume_claim(
                namespace=namespace, body=body
            )

    def list_pvcs(self, namespace: str) -> list[client.V1PersistentVolumeClaim]:
        logger.debug(f"Listing {PVC_KIND} in {namespace}")
        with _api_call("list", PVC_KIND, namespace=namespace):
            result = self.core_v1.list_namespaced_persistent_volume_claim(namespace=namespace)
        return list(result.items or [])

    def delete_pvc(
        self, name: str, namespace: str, propagation_policy: str = FOREGROUND
    ) -> Any:
        logger.debug(f"Deleting {PVC_KIND} {namespace}/{name} ({propagation_policy})")
        with _api_call("delete", PVC_KIND, name, namespace):
            return self.core_v1.delete_namespaced_persistent_volume_claim(
                name=name,
                namespace=namespace,
                body=client.V1DeleteOptions(propagation_policy=propagation_policy),
            )

    # Pods

    def create_pod(self, body: client.V1Pod, namespace: str) -> client.V1Pod:
        name = body.metadata.name
        logger.debug(f"Creating {POD_KIND} {namespace}/{name}")
        with _api_call("create", POD_KIND, name, namespace):
            return self.core_v1.create_namespaced_pod(namespace=namespace, body=body)

    def delete_pod(self, name: str, namespace: str, propagation_policy: str = FOREGROUND) -> Any:
        logger.debug(f"Deleting {POD_KIND} {namespace}/{name} ({propagation_policy})")
        with _api_call("delete", POD_KIND, name, namespace):
            return self.core_v1.delete_namespaced_pod(
                name=name,
                namespace=namespace,
                body=client.V1DeleteOptions(propagation_policy=propagation_policy),
            )


def get_k8s_client(config: MassivePVCConfig) -> K8sClient:
    """Create a Kubernetes client for the given configuration."""
    return K8sClient(config)
