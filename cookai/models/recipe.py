"""Recipe and RecipeIngredient models."""

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from cookai.database import Base
from cookai.models.mixins import SoftDeleteMixin, TimestampMixin


class Recipe(Base, TimestampMixin, SoftDeleteMixin):
    """Recipe owned by a user, captured manually, imported or generated."""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    source_type = Column(String(20), nullable=False, default="manual")  # see SourceType
    source_url = Column(String(2000), nullable=True)
    prep_time_minutes = Column(Integer, nullable=True)
    cook_time_minutes = Column(Integer, nullable=True)
    total_time_minutes = Column(Integer, nullable=True)
    servings = Column(Integer, nullable=True)
    difficulty = Column(String(10), nullable=True)  # "easy", "medium", "hard"
    cuisine = Column(String(100), nullable=True, index=True)
    tags = Column(JSON, nullable=False, default=list)
    instructions = Column(JSON, nullable=False, default=list)  # ["Step 1", "Step 2", ...]
    notes = Column(Text, nullable=True)
    is_favorite = Column(Boolean, nullable=False, default=False)
    times_cooked = Column(Integer, nullable=False, default=0)
    last_cooked_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", backref="recipes")
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.order_index",
    )


class RecipeIngredient(Base, TimestampMixin):
    """Ingredient within a recipe."""

    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Float, nullable=True)
    unit = Column(String(50), nullable=True)
    preparation = Column(String(500), nullable=True)  # "diced", "minced", ...
    is_optional = Column(Boolean, nullable=False, default=False)
    group_name = Column(String(100), nullable=True)  # "For the sauce"
    order_index = Column(Integer, nullable=False, default=0)

    # Relationships
    recipe = relationship("Recipe", back_populates="ingredients")
