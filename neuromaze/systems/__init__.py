"""Engine systems: RNG, connectivity, maze generation and adaptation, spawning."""

from neuromaze.systems.rng import DeterministicRNG
from neuromaze.systems.connectivity import reachable, reachable_under_hypothetical
from neuromaze.systems.maze_generator import MazeGenerator
from neuromaze.systems.adapter import MazeAdapter, TileFlip
from neuromaze.systems.spawner import EntitySpawner

__all__ = [
    "DeterministicRNG",
    "EntitySpawner",
    "MazeAdapter",
    "MazeGenerator",
    "TileFlip",
    "reachable",
    "reachable_under_hypothetical",
]
