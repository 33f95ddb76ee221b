from sqlalchemy import Column, Integer, String, Float
from app.database import Base

class MenuItem(Base):
    __tablename__ = "menu"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    image = Column(String(1024), nullable=False)
    price = Column(Float, nullable=False)
    description = Column(String(2048), nullable=False)
