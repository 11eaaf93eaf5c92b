"""Domain-specific exceptions for quest services."""

from config.exceptions import Conflict, InvalidArgument, NotFound, ServiceError


class QuestsServiceError(ServiceError):
    """Base exception for quest services."""
    pass


class QuestNotFoundError(QuestsServiceError, NotFound):
    """Raised when quest does not exist."""
    pass


class QuestNotAcceptingSubmissionsError(QuestsServiceError, Conflict):
    """Raised when a quest is inactive, archived or past its deadline."""
    pass


class WrongQuestCategoryError(QuestsServiceError, InvalidArgument):
    """Raised when an operation is not supported for the quest's category."""
    pass
