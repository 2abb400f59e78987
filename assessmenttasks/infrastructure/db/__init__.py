from . import models  # noqa: F401
from .base import Base
from .context import AppContext

__all__ = ["AppContext", "Base"]
