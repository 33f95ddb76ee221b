from typing import Optional
from app.models.user import Role
from app.schemas.user import UserResponse
from app.schemas.franchise import FranchiseResponse


def has_role(user: Optional[UserResponse], role: Role, object_id: Optional[int] = None) -> bool:
    """
    Whether ``user`` holds ``role``.

    With ``object_id`` the assignment must also be scoped to that object,
    e.g. a franchisee role for one particular franchise.
    """
    if user is None:
        return False
    for assignment in user.roles:
        if assignment.role != role:
            continue
        if object_id is None or assignment.object_id == object_id:
            return True
    return False


def is_admin(user: Optional[UserResponse]) -> bool:
    return has_role(user, Role.admin)


def can_act_on_user(user: Optional[UserResponse], target_user_id: int) -> bool:
    """A user may act on their own record; admins may act on any."""
    if user is None:
        return False
    return user.id == target_user_id or is_admin(user)


def can_manage_franchise(user: Optional[UserResponse], franchise: Optional[FranchiseResponse]) -> bool:
    """Admins manage every franchise, franchise admins manage their own."""
    if user is None or franchise is None:
        return False
    if is_admin(user):
        return True
    return any(admin.id == user.id for admin in franchise.admins or [])
