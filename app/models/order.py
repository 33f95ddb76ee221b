from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from app.database import Base

class DinerOrder(Base):
    __tablename__ = "dinerOrder"

    id = Column(Integer, primary_key=True, index=True)
    diner_id = Column("dinerId", Integer, ForeignKey("user.id"), nullable=False, index=True)
    franchise_id = Column("franchiseId", Integer, nullable=False, index=True)
    store_id = Column("storeId", Integer, nullable=False, index=True)
    date = Column(DateTime, server_default=func.now(), nullable=False)

    items = relationship("OrderItem", back_populates="order", order_by="OrderItem.id")

class OrderItem(Base):
    __tablename__ = "orderItem"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column("orderId", Integer, ForeignKey("dinerOrder.id"), nullable=False, index=True)
    menu_id = Column("menuId", Integer, ForeignKey("menu.id"), nullable=False, index=True)
    description = Column(String(255), nullable=False)
    price = Column(Float, nullable=False)

    order = relationship("DinerOrder", back_populates="items")
