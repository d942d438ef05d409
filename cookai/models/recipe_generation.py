"""RecipeGeneration model for async LLM recipe generation."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text

from cookai.database import Base
from cookai.models.mixins import TimestampMixin


class RecipeGeneration(Base, TimestampMixin):
    """Model for storing recipe generation requests and their results."""

    __tablename__ = "recipe_generations"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    request = Column(JSON, nullable=False)  # prompt, cuisine, ingredients, max_time_minutes
    status = Column(String(20), nullable=False, default="pending", index=True)
    generated_recipe = Column(JSON, nullable=True)
    error_message = Column(Text, nullable=True)
    processed_at = Column(DateTime(timezone=True), nullable=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=True)
