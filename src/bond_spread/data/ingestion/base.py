# src/bond_spread/data/ingestion/base.py
from abc import ABC, abstractmethod
from typing import List

from bond_spread.alignment.schemas import Observation


class BaseIngestor(ABC):
    """Abstract base class for async observation sources."""

    @abstractmethod
    async def fetch_data(self, *args, **kwargs):
        """Fetch the raw payload."""
        pass

    @abstractmethod
    async def transform(self, raw_data) -> List[Observation]:
        """Turn the raw payload into Observations."""
        pass

    async def run(self, *args, **kwargs) -> List[Observation]:
        raw_data = await self.fetch_data(*args, **kwargs)
        return await self.transform(raw_data)
