"""
Request context - the authenticated principal, passed explicitly into every
lifecycle call instead of being looked up from ambient state.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from app.core.exceptions import AuthorizationError


@dataclass(frozen=True)
class RequestContext:
    user_id: Optional[uuid.UUID]
    organization_id: Optional[uuid.UUID] = None
    role: str = "system"
    is_system: bool = False

    @classmethod
    def system(cls) -> "RequestContext":
        """Context for scripts, migrations and tests: no organization scope."""
        return cls(user_id=None, is_system=True)

    @classmethod
    def for_user(cls, user) -> "RequestContext":
        role = user.role.value if hasattr(user.role, "value") else str(user.role)
        return cls(user_id=user.id, organization_id=user.organization_id, role=role)

    @property
    def actor(self) -> str:
        return str(self.user_id) if self.user_id else "system"

    def can_access(self, property_) -> bool:
        # A user outside any organization only reaches unowned properties
        if self.is_system:
            return True
        return property_.organization_id == self.organization_id

    def ensure_access(self, property_) -> None:
        if not self.can_access(property_):
            raise AuthorizationError(
                f"Property {property_.id} does not belong to organization {self.organization_id}"
            )

    def owning_organization(self, requested: Optional[uuid.UUID]) -> Optional[uuid.UUID]:
        """Organization a new property is created under."""
        if self.is_system:
            return requested
        if requested is not None and requested != self.organization_id:
            raise AuthorizationError(
                f"Cannot create a property in organization {requested} from organization {self.organization_id}"
            )
        return self.organization_id
