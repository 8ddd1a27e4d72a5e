"""Selectors describing who should receive a notification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class SingleUser:
    """Address a notification to one user."""

    user_id: int


@dataclass(frozen=True)
class AllAdmins:
    """Address a notification to every administrator."""


RecipientSelector = Union[SingleUser, AllAdmins]


__all__ = ["AllAdmins", "RecipientSelector", "SingleUser"]
