"""
Organization Directory invariant guard

At most one open (active or suspended) license per organization. Every path
that creates or reactivates a license asks this guard first.
"""

from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.licensing import blocks_issuance


async def can_issue_license(uow: UnitOfWork, organization_id: UUID) -> bool:
    """True only if no license of the organization is active or suspended."""
    licenses = await uow.licenses.get_by_organization_id(organization_id)
    return not blocks_issuance(licenses)
