from abc import ABC, abstractmethod


class TrainingRepository(ABC):
    @abstractmethod
    async def recompute_graduates(self, training_id: str) -> int:
        """Set ``graduates`` to a full recount of certified participants."""
        pass
