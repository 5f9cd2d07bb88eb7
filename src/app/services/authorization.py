"""
Actor authorization

Re-derives an actor's grants from storage on every mutating call. Token
claims and client-side role displays are never trusted for this.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import OrganizationType, PortalType, UserStatus
from src.domain.permissions import ReviewAction, can_perform


@dataclass(frozen=True)
class ActorGrants:
    user_id: UUID
    portal_type: PortalType
    permissions: FrozenSet[str]

    def can(
        self,
        action: ReviewAction,
        organization_type: Optional[OrganizationType] = None,
    ) -> bool:
        return can_perform(
            self.portal_type, self.permissions, action, organization_type
        )


async def load_actor_grants(uow: UnitOfWork, user_id: UUID) -> Optional[ActorGrants]:
    """
    Load the actor's effective permission keys.

    Returns None for unknown or disabled users. A role that no longer exists
    (or was never assigned) yields an empty permission set.
    """
    user = await uow.users.get_by_id(user_id)
    if user is None or user.status != UserStatus.active:
        return None

    permissions: FrozenSet[str] = frozenset()
    if user.role_id is not None:
        role = await uow.roles.get_by_id(user.role_id)
        if role is not None and role.portal_type == user.portal_type:
            permissions = frozenset(role.permissions or [])

    return ActorGrants(
        user_id=user.id, portal_type=user.portal_type, permissions=permissions
    )
