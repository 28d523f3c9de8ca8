from sqlalchemy import Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from app.database.base import Base


class Warehouse(Base):
    __tablename__ = "warehouses"

    id = Column(Integer, primary_key=True)
    company_id = Column(
        Integer,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    )
    name = Column(String, nullable=False)
    address = Column(String)

    company = relationship("Company", back_populates="warehouses")

    __table_args__ = (
        Index("idx_warehouses_company", "company_id"),
    )


__all__ = ["Warehouse"]
