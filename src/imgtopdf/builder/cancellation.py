"""
Module: builder.cancellation

Purpose:
    Cancellation token for a conversion run. The controller issues a
    fresh token per run and cancels the previous one, so superseding a
    conversion never touches shared mutable state.

Key Classes:
    - CancellationToken: Thread-safe, one-way cancel flag

Dependencies:
    - threading (std)

Used By:
    - builder.controller: Checkpoints between images and before writing
"""

from __future__ import annotations

import threading

from imgtopdf.core.errors import ConversionCancelled


class CancellationToken:
    """
    One-way cancellation flag.

    Once cancelled a token stays cancelled; start a new run with a new
    token.

    Example:
        >>> token = CancellationToken()
        >>> token.cancel()
        >>> token.raise_if_cancelled()
        Traceback (most recent call last):
        ...
        imgtopdf.core.errors.ConversionCancelled: Conversion cancelled
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """
        Raises:
            ConversionCancelled: If cancel() has been called
        """
        if self._event.is_set():
            raise ConversionCancelled("Conversion cancelled")

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"CancellationToken({state})"
