from decimal import Decimal

from sqlalchemy import CheckConstraint, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class ProductModel(Base):
    __tablename__ = 'product'
    __table_args__ = (
        CheckConstraint('price > 0', name='ck_product_price_positive'),
        CheckConstraint('quantity >= 0', name='ck_product_quantity_non_negative'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    # No foreign key: deleting a seller leaves their products in place
    seller_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    def __repr__(self):
        return f'<ProductModel(id={self.id}, name={self.name}, seller_id={self.seller_id})>'
