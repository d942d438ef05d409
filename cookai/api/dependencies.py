"""FastAPI dependencies for authentication, database and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from cookai.database import get_db
from cookai.models.user import User
from cookai.services.auth import decode_access_token
from cookai.services.grocery_service import GroceryService
from cookai.services.meal_plan_service import MealPlanService
from cookai.services.recipe_service import RecipeService
from cookai.services.taste_profile_store import TasteProfileStore

security = HTTPBearer()


def _credentials_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    payload = decode_access_token(credentials.credentials)
    if payload is None or payload.get("sub") is None:
        raise _credentials_error("Invalid authentication credentials")

    user = db.query(User).filter(User.id == int(payload["sub"])).first()
    if user is None:
        raise _credentials_error("User not found")

    return user


def get_recipe_service(
    db: Annotated[Session, Depends(get_db)],
) -> RecipeService:
    """Get recipe service with dependencies."""
    return RecipeService(db)


def get_grocery_service(
    db: Annotated[Session, Depends(get_db)],
) -> GroceryService:
    """Get grocery service with dependencies."""
    return GroceryService(db)


def get_taste_profile_store(
    db: Annotated[Session, Depends(get_db)],
) -> TasteProfileStore:
    """Get taste profile storage bound to the request's session."""
    return TasteProfileStore(db)


def get_meal_plan_service(
    db: Annotated[Session, Depends(get_db)],
) -> MealPlanService:
    """Get meal plan service with dependencies."""
    return MealPlanService(db)
