"""
Site context stub.

Stands in for a remote-sensing service that annotates a field with vegetation
index, slope and soil class. Values come from a seeded generator so repeated
runs are reproducible. Nothing here feeds the calculations.
"""

import logging
import random
from datetime import datetime
from typing import Optional

from .core import constants
from .core.date_utils import DateUtils
from .models import SiteContext

SLOPE_CLASSES = ("Flat", "Gentle", "Moderate", "Steep")
SOIL_TYPES = ("Sandy loam", "Loam", "Clay loam", "Clay")


class SiteContextProvider:
    """Seeded mock of satellite-derived site information."""

    def __init__(
        self,
        seed: int = constants.DEFAULT_SITE_CONTEXT_SEED,
        date_utils: Optional[DateUtils] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize site context provider.

        Args:
            seed: Random seed
            date_utils: Timestamp source
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.date_utils = date_utils or DateUtils(constants.DEFAULT_TIMEZONE, self.logger)
        self._rng = random.Random(seed)

    def fetch(self, reference_time: Optional[datetime] = None) -> SiteContext:
        """
        Produce the next site context.

        Args:
            reference_time: Timestamp to stamp the record with (defaults to now)

        Returns:
            SiteContext with NDVI in [0.3, 0.8]
        """
        context = SiteContext(
            ndvi_mean=round(0.3 + self._rng.random() * 0.5, 2),
            slope_class=self._rng.choice(SLOPE_CLASSES),
            soil_type=self._rng.choice(SOIL_TYPES),
            timestamp=self.date_utils.timestamp(reference_time),
        )
        self.logger.debug(f"Site context: {context}")
        return context
