"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case operating on the session registry."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
