"""GroceryList and GroceryItem models."""

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from cookai.database import Base
from cookai.models.mixins import TimestampMixin


class GroceryList(Base, TimestampMixin):
    """Shopping list built from recipes and manual entries."""

    __tablename__ = "grocery_lists"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    user = relationship("User", backref="grocery_lists")
    items = relationship(
        "GroceryItem",
        back_populates="grocery_list",
        cascade="all, delete-orphan",
        order_by="GroceryItem.order_index",
    )


class GroceryItem(Base, TimestampMixin):
    """Single line on a grocery list."""

    __tablename__ = "grocery_items"

    id = Column(Integer, primary_key=True, index=True)
    grocery_list_id = Column(Integer, ForeignKey("grocery_lists.id"), nullable=False, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Float, nullable=True)  # Stored as a number so merges can add
    unit = Column(String(50), nullable=True)
    aisle = Column(String(50), nullable=True)
    notes = Column(String(500), nullable=True)
    is_checked = Column(Boolean, nullable=False, default=False, index=True)
    order_index = Column(Integer, nullable=False, default=0)

    # Relationships
    grocery_list = relationship("GroceryList", back_populates="items")
