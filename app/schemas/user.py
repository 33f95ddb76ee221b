from pydantic import EmailStr, Field
from typing import List, Optional
from app.models.user import Role
from app.schemas.common import CamelModel

class RoleAssignment(CamelModel):
    role: Role
    object_id: Optional[int] = None
    # Franchise name supplied at registration for franchisee roles
    object: Optional[str] = Field(default=None, exclude=True)

class UserBase(CamelModel):
    name: str
    email: EmailStr

class UserCreate(UserBase):
    password: str
    roles: List[RoleAssignment] = []

class RegisterRequest(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None

class LoginRequest(CamelModel):
    email: EmailStr
    password: str

class UserUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None

class UserResponse(UserBase):
    id: int
    roles: List[RoleAssignment] = []

class AuthResponse(CamelModel):
    user: UserResponse
    token: str

class UserListResponse(CamelModel):
    users: List[UserResponse]
    more: bool
