"""init file for models module."""
from app.models.types import NonEscapedJSON
from app.models.restaurants import Restaurant
from app.models.submissions import RestaurantSubmission
from app.models.user import User


__all__ = [
    "NonEscapedJSON",
    "Restaurant",
    "RestaurantSubmission",
    "User",
]
