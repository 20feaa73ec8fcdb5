"""Configuration management for massive-pvc."""

import os
import re
from enum import Enum
from pathlib import Path

from kubernetes.utils import parse_quantity
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DNS_PREFIX_RE = re.compile(r"^[a-z0-9][-a-z0-9]*$")

# Claim names double as pod volume names, which must be DNS-1123 labels
MAX_CLAIM_NAME_LENGTH = 63

IN_CLUSTER_TOKEN_PATH = Path("/var/run/secrets/kubernetes.io/serviceaccount/token")


class AuthMode(str, Enum):
    """Authentication mode for Kubernetes API."""

    AUTO = "auto"
    KUBECONFIG = "kubeconfig"
    IN_CLUSTER = "in-cluster"


class LogLevel(str, Enum):
    """Logging level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class MassivePVCConfig(BaseSettings):
    """Settings for a massive-pvc run.

    Every field can be set through a ``MASSIVE_PVC_``-prefixed environment
    variable; command line flags take precedence.
    """

    model_config = SettingsConfigDict(
        env_prefix="MASSIVE_PVC_",
        extra="ignore",
    )

    # Authentication
    auth_mode: AuthMode = Field(
        default=AuthMode.AUTO,
        description="How to authenticate against the Kubernetes API",
    )
    kubeconfig_path: str | None = Field(
        default=None,
        description="Path to kubeconfig file (defaults to $KUBECONFIG or ~/.kube/config)",
    )
    kubeconfig_context: str | None = Field(
        default=None,
        description="Kubeconfig context to use (defaults to current context)",
    )

    # Sequence
    namespace: str = Field(default="default", description="Namespace for all objects")
    start: int = Field(default=0, description="First claim index (inclusive)")
    end: int = Field(default=5, description="Last claim index (inclusive)")
    interactive: bool = Field(
        default=True,
        description="Wait for the Return key between steps",
    )

    # Storage claims
    claim_prefix: str = Field(default="pvc-", description="Claim name prefix")
    claim_size: str = Field(default="1Gi", description="Requested capacity per claim")

    # Consumer pod
    consumer_name: str = Field(default="hold-massive-pvcs", description="Consumer pod name")
    consumer_image: str = Field(default="ubuntu:latest", description="Consumer image")
    sleep_seconds: int = Field(default=3600, ge=0, description="Consumer sleep duration")

    # Logging
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")

    @field_validator("claim_prefix")
    @classmethod
    def check_claim_prefix(cls, value: str) -> str:
        if not _DNS_PREFIX_RE.match(value):
            raise ValueError(
                "claim_prefix must start with a lowercase letter or digit and contain "
                "only lowercase letters, digits and '-'"
            )
        return value

    @field_validator("claim_size")
    @classmethod
    def check_claim_size(cls, value: str) -> str:
        try:
            quantity = parse_quantity(value)
        except ValueError as e:
            raise ValueError(f"claim_size is not a valid quantity: {value}") from e
        if quantity <= 0:
            raise ValueError("claim_size must be greater than zero")
        return value

    @model_validator(mode="after")
    def check_claim_name_length(self) -> "MassivePVCConfig":
        if self.start > self.end:
            return self
        longest = max(len(str(self.start)), len(str(self.end)))
        if len(self.claim_prefix) + longest > MAX_CLAIM_NAME_LENGTH:
            raise ValueError(
                f"claim names '{self.claim_prefix}<index>' exceed "
                f"{MAX_CLAIM_NAME_LENGTH} characters for the range {self.start}..{self.end}"
            )
        return self

    @property
    def effective_kubeconfig_path(self) -> Path:
        """Kubeconfig path after applying $KUBECONFIG and the home default."""
        if self.kubeconfig_path:
            return Path(self.kubeconfig_path).expanduser()
        env_path = os.environ.get("KUBECONFIG")
        if env_path:
            # $KUBECONFIG may hold a list of files; the first one wins here
            return Path(env_path.split(os.pathsep)[0]).expanduser()
        return Path.home() / ".kube" / "config"

    @property
    def claim_count(self) -> int:
        """Number of claims in the configured range (0 when start > end)."""
        return max(0, self.end - self.start + 1)

    def use_in_cluster(self) -> bool:
        """Whether the client should load the in-cluster service account."""
        if self.auth_mode == AuthMode.IN_CLUSTER:
            return True
        if self.auth_mode == AuthMode.KUBECONFIG:
            return False
        return not self.effective_kubeconfig_path.exists()

    def validate_auth_config(self) -> list[str]:
        """Validate authentication settings.

        Returns:
            Warnings worth surfacing to the operator.

        Raises:
            ValueError: If the configuration cannot work.
        """
        warnings: list[str] = []
        kubeconfig = self.effective_kubeconfig_path

        if self.auth_mode == AuthMode.KUBECONFIG and not kubeconfig.exists():
            raise ValueError(f"kubeconfig file not found: {kubeconfig}")

        if self.auth_mode == AuthMode.AUTO and not kubeconfig.exists():
            if not IN_CLUSTER_TOKEN_PATH.exists():
                warnings.append(
                    f"kubeconfig {kubeconfig} not found and no in-cluster service "
                    "account detected; connecting will likely fail"
                )

        if self.kubeconfig_context and self.use_in_cluster():
            warnings.append("kubeconfig_context is ignored with in-cluster authentication")

        return warnings
