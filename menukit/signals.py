"""
Control signals returned by prompts in place of a value.
"""

from enum import Enum


class ControlSignal(Enum):
    """User intent to leave a prompt without choosing a value.

    BACK: Escape, the caller may re-show a parent prompt.
    EXIT: interrupt key (Ctrl-D), the caller should end the session.
    """

    BACK = "back"
    EXIT = "exit"

    def __str__(self) -> str:
        return f"{self.value} request"


BACK_REQUEST = ControlSignal.BACK
EXIT_REQUEST = ControlSignal.EXIT
