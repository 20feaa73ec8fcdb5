"""Tests for error types and error enhancement."""

from massive_pvc.utils.errors import (
    AuthenticationError,
    ConfigurationError,
    EnhancedError,
    ErrorPattern,
    ExternalCallError,
    MassivePVCError,
    NotFoundError,
    ResourceExistsError,
    enhance_error,
)


class TestEnhancedError:
    """Test EnhancedError dataclass."""

    def test_default_related_commands(self) -> None:
        error = EnhancedError(
            error="Error",
            error_code="CODE",
            suggestion="Suggestion",
        )

        assert error.related_commands == []

    def test_to_dict(self) -> None:
        error = EnhancedError(
            error="Test error",
            error_code="TEST",
            suggestion="Fix it",
            related_commands=["kubectl get pvc"],
        )

        assert error.to_dict() == {
            "error": "Test error",
            "error_code": "TEST",
            "suggestion": "Fix it",
            "related_commands": ["kubectl get pvc"],
        }


class TestErrorPattern:
    def test_create_pattern(self) -> None:
        pattern = ErrorPattern(
            pattern=r"(?i)not found",
            error_code="NOT_FOUND",
            suggestion="Check the resource name",
        )

        assert pattern.related_commands == []


class TestEnhanceError:
    """Test enhance_error function."""

    def test_namespace_not_found(self) -> None:
        enhanced = enhance_error(
            "Failed to create PersistentVolumeClaim 'pvc-0' in namespace 'scratch': "
            'namespaces "scratch" not found'
        )

        assert enhanced.error_code == "NAMESPACE_NOT_FOUND"
        assert "kubectl get namespaces" in enhanced.related_commands

    def test_not_found(self) -> None:
        enhanced = enhance_error(
            "Failed to delete PersistentVolumeClaim 'pvc-3' in namespace 'default': "
            'persistentvolumeclaims "pvc-3" not found'
        )

        assert enhanced.error_code == "NOT_FOUND"

    def test_already_exists(self) -> None:
        enhanced = enhance_error('persistentvolumeclaims "pvc-0" already exists')

        assert enhanced.error_code == "ALREADY_EXISTS"

    def test_auth(self) -> None:
        enhanced = enhance_error(
            'pods is forbidden: User "dev" cannot create resource "pods"'
        )

        assert enhanced.error_code == "AUTH_FAILED"
        assert any("auth can-i" in c for c in enhanced.related_commands)

    def test_connection(self) -> None:
        enhanced = enhance_error("Max retries exceeded with url: /api/v1 (Connection refused)")

        assert enhanced.error_code == "CONNECTION_FAILED"

    def test_quota(self) -> None:
        enhanced = enhance_error(
            "exceeded quota: storage, requested: requests.storage=1Gi"
        )

        assert enhanced.error_code == "QUOTA_EXCEEDED"

    def test_unknown(self) -> None:
        enhanced = enhance_error("something odd happened")

        assert enhanced.error_code == "UNKNOWN_ERROR"
        assert enhanced.error == "something odd happened"


class TestExceptions:
    def test_base_with_details(self) -> None:
        error = MassivePVCError("broken", {"field": "x"})

        assert str(error) == "broken: {'field': 'x'}"

    def test_configuration_error(self) -> None:
        error = ConfigurationError("bad value", field="claim_size")

        assert isinstance(error, MassivePVCError)
        assert error.details == {"field": "claim_size"}

    def test_external_call_message(self) -> None:
        error = ExternalCallError(
            "create", "PersistentVolumeClaim", "pvc-1", "default", reason="boom", status=500
        )

        assert str(error) == (
            "Failed to create PersistentVolumeClaim 'pvc-1' in namespace 'default': boom"
        )
        assert error.status == 500

    def test_external_call_without_target(self) -> None:
        error = ExternalCallError("list", "PersistentVolumeClaim")

        assert str(error) == "Failed to list PersistentVolumeClaim"

    def test_subclasses_are_external_call_errors(self) -> None:
        for cls in (NotFoundError, ResourceExistsError, AuthenticationError):
            assert issubclass(cls, ExternalCallError)
            assert issubclass(cls, MassivePVCError)
