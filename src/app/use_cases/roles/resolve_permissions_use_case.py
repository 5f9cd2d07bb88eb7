"""
Resolve Permissions Use Case

Maps a job-title style role label to its analytics role class and grants.
"""

from typing import Optional

from libs.result import Result, Return
from src.domain.permissions import granted_permissions, resolve_role

from .dtos import ResolvedPermissions


class ResolvePermissionsUseCase:
    """
    Resolve a role label for display gating.

    Never fails: unknown or empty labels resolve to the least-privileged class.
    """

    async def execute(self, role_label: Optional[str]) -> Result[ResolvedPermissions]:
        role = resolve_role(role_label)
        return Return.ok(
            ResolvedPermissions(
                role_label=role_label,
                role=role.value,
                granted_permissions=granted_permissions(role),
            )
        )
