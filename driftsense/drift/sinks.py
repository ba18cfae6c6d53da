"""
Outcome sinks for drift episodes.

The engine reports every baseline update and drift check to an injected
EpisodeSink. How and where episodes are persisted is up to the implementation;
the engine only awaits `store_episode` and reads back an id.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List

from .schema import Episode

logger = logging.getLogger(__name__)


class EpisodeSink(ABC):
    """Interface for recording drift outcomes."""

    @abstractmethod
    async def store_episode(self, episode: Episode) -> int:
        """Persist an episode and return its id."""


class NullEpisodeSink(EpisodeSink):
    """
    Sink that discards every episode.

    Used when no outcome store is configured.
    """

    async def store_episode(self, episode: Episode) -> int:
        logger.debug("Discarding episode %s (%s)", episode.session_id, episode.task)
        return 0


class InMemoryEpisodeSink(EpisodeSink):
    """
    Sink that keeps episodes in a list, ids starting at 1.
    """

    def __init__(self) -> None:
        self.episodes: List[Episode] = []

    async def store_episode(self, episode: Episode) -> int:
        self.episodes.append(episode)
        return len(self.episodes)

    def by_task(self, task: str) -> List[Episode]:
        return [e for e in self.episodes if e.task == task]
