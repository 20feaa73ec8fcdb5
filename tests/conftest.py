"""Pytest configuration and fixtures for massive-pvc tests."""

import os
from unittest.mock import MagicMock, patch

import pytest

from massive_pvc.config import AuthMode, MassivePVCConfig


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's environment out of settings resolution."""
    for key in list(os.environ):
        if key.startswith("MASSIVE_PVC_"):
            monkeypatch.delenv(key)
    monkeypatch.delenv("KUBECONFIG", raising=False)


@pytest.fixture
def kubeconfig_file(tmp_path):
    """An existing (empty) kubeconfig path."""
    path = tmp_path / "kubeconfig"
    path.write_text("")
    return path


@pytest.fixture
def mock_config(kubeconfig_file) -> MassivePVCConfig:
    """Create a test configuration."""
    return MassivePVCConfig(
        auth_mode=AuthMode.KUBECONFIG,
        kubeconfig_path=str(kubeconfig_file),
        interactive=False,
    )


def make_pvc(
    name: str, namespace: str = "default", labels: dict[str, str] | None = None
) -> MagicMock:
    """Create a mock PVC as returned by list calls."""
    pvc = MagicMock()
    pvc.metadata.name = name
    pvc.metadata.namespace = namespace
    pvc.metadata.labels = labels or {}
    pvc.status.phase = "Pending"
    return pvc


@pytest.fixture
def existing_pvcs() -> list[str]:
    """Claims already present in the namespace before a run."""
    return ["unrelated-data"]


@pytest.fixture
def mock_k8s_client(existing_pvcs):
    """A mocked K8sClient that behaves like an empty, healthy cluster."""
    client = MagicMock()
    client.is_connected = True
    live = list(existing_pvcs)
    labels: dict[str, dict[str, str]] = {}

    def create_pvc(body, namespace):
        live.append(body.metadata.name)
        labels[body.metadata.name] = body.metadata.labels
        return body

    def delete_pvc(name, namespace, propagation_policy="Foreground"):
        live.remove(name)

    def list_pvcs(namespace):
        return [make_pvc(n, namespace, labels.get(n)) for n in live]

    client.create_pvc.side_effect = create_pvc
    client.delete_pvc.side_effect = delete_pvc
    client.list_pvcs.side_effect = list_pvcs
    client.create_pod.side_effect = lambda body, namespace: body
    client.live_pvcs = live
    return client


@pytest.fixture
def mock_core_v1_api():
    """Create a mocked CoreV1Api."""
    with patch("kubernetes.client.CoreV1Api") as mock_api:
        yield mock_api.return_value
