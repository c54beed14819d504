"""Image classification for camera frames."""

import logging
import random
from abc import ABC, abstractmethod
from typing import Any

_LOGGER = logging.getLogger(__name__)


class ImageClassifier(ABC):
    """Decides whether a camera frame shows a cat."""

    @abstractmethod
    def contains_cat(self, image: Any, threshold: float) -> bool:
        """Classify an image.

        Args:
            image: Opaque image payload (bytes, array, PIL image...)
            threshold: Minimum confidence (0-100) to report a cat

        Returns:
            True if a cat was detected with at least the given confidence
        """


class FakeImageClassifier(ImageClassifier):
    """Stand-in classifier that does not look at the image.

    With a fixed ``result`` every frame gets that answer; otherwise each
    frame gets a pseudo-random answer, reproducible when ``seed`` is given.
    """

    def __init__(self, result: bool | None = None, seed: int | None = None):
        """Initialize classifier.

        Args:
            result: Answer to return for every frame (default: random)
            seed: Seed for the random answers
        """
        self.result = result
        self._random = random.Random(seed)
        self.last_threshold: float | None = None
        self.calls = 0

    def contains_cat(self, image: Any, threshold: float) -> bool:
        self.calls += 1
        self.last_threshold = threshold
        found = self.result if self.result is not None else self._random.random() > 0.5
        _LOGGER.debug(f"Fake classification (threshold={threshold}): cat={found}")
        return found

    def __repr__(self) -> str:
        """String representation."""
        mode = "random" if self.result is None else str(self.result)
        return f"<FakeImageClassifier {mode}>"
