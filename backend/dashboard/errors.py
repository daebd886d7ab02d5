"""Errors raised at the dashboard core boundary."""

from __future__ import annotations


class NoticeFetchFailure(Exception):
    """
    The deprecation notice fetch raised.

    The client's original exception is chained as __cause__.
    """

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"{type(cause).__name__}: {cause}")
        self.cause = cause
