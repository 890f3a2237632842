"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for a game session."""

    # World
    seed: int = 42
    grid_size: int = 15
    wall_probability: float = 0.25

    # Timing
    tick_rate: float = 0.05                # seconds between ticks (20 tps)
    max_ticks: int = 20000                 # headless runs only

    # Player
    player_max_health: int = 100
    score_per_move: int = 1
    move_history_length: int = 20
    player_visual_easing: float = 0.3

    # Enemies
    enemy_base_count: int = 1
    enemy_spawn_min: int = 5               # spawn band lower bound (both axes)
    enemy_decision_interval: int = 12      # ticks between path recomputes (~0.6s)
    enemy_visual_easing: float = 0.1
    enemy_intelligence_base: float = 0.7
    enemy_intelligence_per_level: float = 0.05
    enemy_intelligence_growth: float = 0.002   # per decision
    enemy_intelligence_max: float = 1.0

    # Collision
    collision_distance: float = 0.5
    collision_damage: int = 20

    # Powerups
    powerup_count: int = 3
    powerup_health_chance: float = 0.3
    heal_amount: int = 20
    score_pickup: int = 50

    # Pathfinding
    max_path_nodes: int = 200              # A* closed-set cap

    # Adaptation
    adaptation_interval: int = 60
    adaptation_rate: float = 0.05
    adapt_min_radius: int = 3              # Manhattan radius around player left untouched
    axis_bias_strength: float = 0.5
    wall_warning_ticks: int = 0            # 0 = commit wall flips immediately

    # Special ability (area push)
    ability_max_charge: float = 100.0
    ability_cost: float = 100.0
    ability_regen_per_tick: float = 0.5
    ability_radius: int = 3
    ability_push_distance: int = 2

    # Logging / persistence
    log_level: str = "INFO"
    log_file: str | None = None
    replay_file: str = "replay.json"
    highscore_file: str = "highscore.json"
