"""Exceptions shared by the calculator modules."""


class InvalidInput(ValueError):
    """Raised when a calculator cannot work with the numbers it was given.

    The message is short and user-facing; the app shows it as an inline
    warning in place of the results panel.
    """


__all__ = ["InvalidInput"]
