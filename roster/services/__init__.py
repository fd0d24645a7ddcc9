"""
High-level use cases for the roster API.

Each service orchestrates repositories to implement the business rules
(validation, roster changes, search) and returns every result wrapped in the
ApiResponse envelope. Routers call these services instead of repositories.
"""

from .event_service import EventService
from .responses import ApiResponse
from .user_service import UserService

__all__ = ["ApiResponse", "EventService", "UserService"]
