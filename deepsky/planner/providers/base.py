from abc import ABC, abstractmethod
from typing import Sequence

from deepsky.planner.types import DeepSkyTarget


class CatalogProvider(ABC):
    name: str

    @abstractmethod
    def list_targets(self) -> Sequence[DeepSkyTarget]:
        raise NotImplementedError
