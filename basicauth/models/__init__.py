# Database Models
from basicauth.models.user import User

__all__ = ["User"]
