from pydantic import EmailStr
from typing import List, Optional
from app.schemas.common import CamelModel

class FranchiseAdmin(CamelModel):
    id: int
    name: str
    email: EmailStr

class FranchiseAdminRef(CamelModel):
    email: EmailStr

class StoreCreate(CamelModel):
    name: str

class StoreResponse(CamelModel):
    id: int
    name: str
    franchise_id: Optional[int] = None
    total_revenue: Optional[float] = None

class FranchiseCreate(CamelModel):
    name: str
    admins: List[FranchiseAdminRef] = []

class FranchiseResponse(CamelModel):
    id: int
    name: str
    admins: Optional[List[FranchiseAdmin]] = None
    stores: List[StoreResponse] = []

class FranchiseListResponse(CamelModel):
    franchises: List[FranchiseResponse]
    more: bool
