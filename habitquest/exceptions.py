"""
Custom exceptions for the habitquest backend.
Controllers and services raise these; main.py maps them to HTTP responses.
"""


class HabitQuestException(Exception):
    """Base exception for the application"""
    status_code = 500


class ValidationException(HabitQuestException):
    """Raised when request data is missing or malformed"""
    status_code = 400

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error for {field}: {message}")


class NotFoundException(HabitQuestException):
    """Raised when an entity is absent (or owned by someone else)"""
    status_code = 404


class UserNotFoundException(NotFoundException):
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class GoalNotFoundException(NotFoundException):
    def __init__(self, goal_id: str):
        self.goal_id = goal_id
        super().__init__("Goal not found")


class AchievementNotFoundException(NotFoundException):
    def __init__(self, achievement_id: str):
        self.achievement_id = achievement_id
        super().__init__("Achievement not found")
