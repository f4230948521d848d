"""Exceptions raised by the control loop."""

from __future__ import annotations


class InvalidUserDecision(ValueError):
    """Decision value outside the allowed set {continue, view history, exit}."""

    def __init__(self, value: object) -> None:
        self.value = value
        msg = f"Invalid choice {value!r}. Please select 1, 2, or 3."
        super().__init__(msg)


class InvalidStateTransition(RuntimeError):
    """Loop operation requested from a state that does not allow it."""

    def __init__(self, operation: str, state: str) -> None:
        self.operation = operation
        self.state = state
        msg = f"Cannot {operation} while loop is {state}"
        super().__init__(msg)
