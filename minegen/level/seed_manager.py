"""
Seed Manager - Resolves the world seed and hands out the generation RNG stream
"""

import logging
import random
from typing import Optional

logger = logging.getLogger(__name__)

MAX_SEED = 2**31 - 1


class SeedManager:
    """Resolves a world seed once and builds the single RNG used by a run"""

    def __init__(self, world_seed: Optional[int] = 0):
        """
        Initialize seed manager with optional world seed

        Args:
            world_seed: Master seed for the world. 0 or None picks a random seed
                once; the chosen value is kept so the world can be reproduced.
        """
        self.requested_seed = world_seed
        if not world_seed:
            self.world_seed = random.randint(1, MAX_SEED)
            logger.info("No seed given, picked world seed %d", self.world_seed)
        else:
            self.world_seed = int(world_seed)

    def create_random(self) -> random.Random:
        """
        Build a fresh RNG stream for one generation run.

        Every stage draws from this one stream in a fixed order, so a new
        instance is needed for each run.
        """
        return random.Random(self.world_seed)

    def get_world_seed(self) -> int:
        """Get the resolved world seed"""
        return self.world_seed
