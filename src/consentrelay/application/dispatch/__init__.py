from .router import route
from .composer import compose, NO_CONNECTION_STATUS

__all__ = ["route", "compose", "NO_CONNECTION_STATUS"]
