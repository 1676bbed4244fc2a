from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List

from ..models import RawItem


class BaseProvider(ABC):
    """Abstract base class for content providers."""

    name: str = "provider"
    social: bool = False

    @abstractmethod
    def fetch(self, limit: int = 50) -> Iterable[RawItem]:
        """Yield up to ``limit`` ``RawItem`` objects."""


ProviderList = List[BaseProvider]
