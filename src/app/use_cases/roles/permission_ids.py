from typing import List, Optional

from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, ErrorKind


async def find_unknown_permission_ids(
    uow: UnitOfWork, permission_ids: List[int]
) -> Optional[Error]:
    """Error naming the IDs that match no permission, or None if all exist"""
    found = await uow.permissions.get_by_ids(permission_ids)
    missing = sorted(set(permission_ids) - {p.id for p in found})
    if missing:
        return Error(
            "UNKNOWN_PERMISSION",
            f"Unknown permission ids: {', '.join(str(i) for i in missing)}",
            ErrorKind.bad_request,
        )
    return None
