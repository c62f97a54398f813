"""Treasure Run: collect treasures, dodge obstacles, outrun the death zone."""

from treasure_run.config import GameConfig, Variant
from treasure_run.controls import Controls, Direction
from treasure_run.game import TreasureRunGame

__version__ = "0.1.0"

__all__ = ["Controls", "Direction", "GameConfig", "TreasureRunGame", "Variant"]
