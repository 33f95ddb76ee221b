import enum
from sqlalchemy import Column, Integer, String, ForeignKey, Enum
from sqlalchemy.orm import relationship
from app.database import Base


class Role(str, enum.Enum):
    diner = "diner"
    franchisee = "franchisee"
    admin = "admin"


class User(Base):
    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)

    roles = relationship(
        "UserRole",
        back_populates="user",
        order_by="UserRole.id",
        lazy="selectin",
    )


class UserRole(Base):
    __tablename__ = "userRole"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column("userId", Integer, ForeignKey("user.id"), nullable=False, index=True)
    role = Column(Enum(Role, name="role"), nullable=False)
    # Franchise id for franchisee roles, NULL otherwise
    object_id = Column("objectId", Integer, nullable=True, index=True)

    user = relationship("User", back_populates="roles")
