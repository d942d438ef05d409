"""MealPlan and MealPlanEntry models."""

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from cookai.database import Base
from cookai.models.mixins import TimestampMixin


class MealPlan(Base, TimestampMixin):
    """One user's plan for a Monday-to-Sunday week."""

    __tablename__ = "meal_plans"
    __table_args__ = (
        UniqueConstraint("user_id", "week_start_date", name="uq_user_week_plan"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    week_start_date = Column(Date, nullable=False)  # Always a Monday

    # Relationships
    user = relationship("User", backref="meal_plans")
    entries = relationship(
        "MealPlanEntry",
        back_populates="meal_plan",
        cascade="all, delete-orphan",
        order_by=lambda: [MealPlanEntry.date, MealPlanEntry.id],
    )


class MealPlanEntry(Base):
    """A recipe scheduled for one meal on one day of a plan."""

    __tablename__ = "meal_plan_entries"

    id = Column(Integer, primary_key=True, index=True)
    meal_plan_id = Column(Integer, ForeignKey("meal_plans.id"), nullable=False, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False)
    date = Column(Date, nullable=False, index=True)
    meal_type = Column(String(20), nullable=False)  # see MealType
    servings = Column(Integer, nullable=False, default=1)
    notes = Column(Text, nullable=True)

    # Relationships
    meal_plan = relationship("MealPlan", back_populates="entries")
    recipe = relationship("Recipe")

    @property
    def recipe_title(self) -> str | None:
        return self.recipe.title if self.recipe else None
