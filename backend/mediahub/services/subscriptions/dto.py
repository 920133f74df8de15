# mediahub/services/subscriptions/dto.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ToggleOut:
    """
    Edge state after a toggle.

    :param subscribed: ``True`` when the edge now exists.
    :type subscribed: bool
    """

    subscribed: bool
