"""Services for the quest catalogue."""

from .exceptions import (
    QuestsServiceError,
    QuestNotFoundError,
    QuestNotAcceptingSubmissionsError,
    WrongQuestCategoryError,
)
from .quest_catalogue import (
    get_quest,
    get_open_quest,
    get_active_quests,
    expire_overdue_quests,
)

__all__ = [
    # Exceptions
    'QuestsServiceError',
    'QuestNotFoundError',
    'QuestNotAcceptingSubmissionsError',
    'WrongQuestCategoryError',
    # Services
    'get_quest',
    'get_open_quest',
    'get_active_quests',
    'expire_overdue_quests',
]
