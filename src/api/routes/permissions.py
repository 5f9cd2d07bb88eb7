from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.app.use_cases.roles import ResolvedPermissions, ResolvePermissionsUseCase
from src.depends import get_current_user

router = APIRouter(prefix="/permissions", tags=["Permissions"])


@router.get(
    "/resolve",
    status_code=status.HTTP_200_OK,
    response_model=ResolvedPermissions,
    dependencies=[Depends(get_current_user)],
)
async def resolve_permissions(role_label: Optional[str] = Query(None)):
    """
    Resolve Permissions

    Maps a free-text role label (e.g. "Finance Manager") to its analytics role
    class and granted permissions. Used for display gating only; it never
    authorizes a mutation. Unknown labels resolve to the least-privileged class.
    """
    use_case = ResolvePermissionsUseCase()
    result = await use_case.execute(role_label)
    return result.value
