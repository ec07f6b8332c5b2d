"""User-facing notices raised by the views."""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List

logger = logging.getLogger(__name__)


class NoticeLevel(str, Enum):
    WARNING = "warning"  # transient, non-blocking
    ERROR = "error"  # blocking


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    message: str


@dataclass
class NoticeBoard:
    """Collects notices for the page to show and mirrors them to the log."""

    notices: List[Notice] = field(default_factory=list)

    def warning(self, message: str) -> None:
        logger.warning(message)
        self.notices.append(Notice(NoticeLevel.WARNING, message))

    def error(self, message: str) -> None:
        logger.error(message)
        self.notices.append(Notice(NoticeLevel.ERROR, message))

    @property
    def has_errors(self) -> bool:
        return any(n.level is NoticeLevel.ERROR for n in self.notices)

    def clear(self) -> None:
        self.notices.clear()
