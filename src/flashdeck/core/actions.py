"""Request lifecycle tracking for button-driven network calls.

Every user-triggered call (generate, transcribe, regenerate, confirm) owns a
RequestAction. While it is PENDING the action reports ``enabled == False`` and
refuses to start again, which is what keeps a session down to one in-flight
call per action.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from .exceptions import ActionInProgressError, FlashdeckError

logger = logging.getLogger(__name__)


class ActionStatus(Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class RequestAction:
    """Lifecycle of one kind of request."""
    name: str
    status: ActionStatus = ActionStatus.IDLE
    error: Optional[str] = None

    @property
    def pending(self) -> bool:
        return self.status is ActionStatus.PENDING

    @property
    def enabled(self) -> bool:
        """Whether the control that triggers this action may be used."""
        return not self.pending

    def run(self, func: Callable[..., Any], *args, **kwargs) -> Any:
        """Run ``func`` as this action.

        Raises:
            ActionInProgressError: If the action is already pending
            FlashdeckError: Whatever ``func`` raised; status becomes FAILURE
        """
        if self.pending:
            raise ActionInProgressError(
                f"{self.name} is already in progress", action=self.name
            )

        self.status = ActionStatus.PENDING
        self.error = None
        try:
            result = func(*args, **kwargs)
        except FlashdeckError as e:
            self.status = ActionStatus.FAILURE
            self.error = str(e)
            logger.debug(f"{self.name} failed: {e}")
            raise
        except Exception:
            self.status = ActionStatus.FAILURE
            self.error = f"{self.name} failed unexpectedly"
            raise

        self.status = ActionStatus.SUCCESS
        return result

    def reset(self) -> None:
        self.status = ActionStatus.IDLE
        self.error = None
