"""
Validation utilities and validators.
Centralized validation logic following single responsibility principle.
"""
from core.constants import AssetStatus
from core.exceptions import BusinessLogicError, ValidationError as AppValidationError


class AssetStatusValidator:
    """Validates asset status values"""

    @staticmethod
    def validate_status(status: str):
        """Validate status is a known asset status"""
        if status not in AssetStatus.VALUES:
            raise AppValidationError(
                message=f"Invalid status '{status}'. Must be one of: {', '.join(AssetStatus.VALUES)}",
                code="INVALID_STATUS",
                details={"status": status}
            )

    @staticmethod
    def normalize_status(status, default=AssetStatus.ACTIVE) -> str:
        """Return the status when valid, the default otherwise (used by bulk import)"""
        if status and status in AssetStatus.VALUES:
            return status
        return default


class CategoryHierarchyValidator:
    """Validates category parent assignments"""

    @staticmethod
    def validate_parent(category, parent):
        """
        Reject a parent that is the category itself or one of its descendants.

        Walks up from the proposed parent; reaching the category means the
        assignment would create a cycle.
        """
        if parent is None or category is None or category.pk is None:
            return

        node = parent
        seen = set()
        while node is not None:
            if node.pk == category.pk:
                raise BusinessLogicError(
                    message="A category cannot be its own parent or ancestor",
                    code="CATEGORY_CYCLE",
                    details={"category_id": str(category.pk), "parent_id": str(parent.pk)}
                )
            if node.pk in seen:
                break
            seen.add(node.pk)
            node = node.parent


class PasswordValidator:
    """Validates local account passwords"""

    MIN_LENGTH = 8

    @classmethod
    def validate_password(cls, password: str):
        if not password or len(password) < cls.MIN_LENGTH:
            raise AppValidationError(
                message=f"Password must be at least {cls.MIN_LENGTH} characters",
                code="PASSWORD_TOO_SHORT"
            )
