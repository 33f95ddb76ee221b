from sqlalchemy import Column, Integer, String, ForeignKey
from app.database import Base

class AuthToken(Base):
    __tablename__ = "auth"

    # Signature segment of an issued JWT; presence means "logged in"
    token = Column(String(512), primary_key=True)
    user_id = Column("userId", Integer, ForeignKey("user.id"), nullable=False, index=True)
