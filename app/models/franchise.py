from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base

class Franchise(Base):
    __tablename__ = "franchise"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)

    stores = relationship("Store", back_populates="franchise", order_by="Store.id")

class Store(Base):
    __tablename__ = "store"

    id = Column(Integer, primary_key=True, index=True)
    franchise_id = Column("franchiseId", Integer, ForeignKey("franchise.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)

    franchise = relationship("Franchise", back_populates="stores")
