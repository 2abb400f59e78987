from .models import Assessment, User

__all__ = ["Assessment", "User"]
