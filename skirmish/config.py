"""Combat configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CombatConfig:
    """Immutable configuration for a combat session."""

    # World
    world_seed: int = 42
    screen_width: int = 1024
    screen_height: int = 768
    world_width: int = 3000
    ground_height_ratio: float = 0.5       # Walkable band takes the lower half of the screen

    # Timing
    tick_ms: float = 50.0                  # Simulated milliseconds per tick (20 tps)
    max_ticks: int = 20000

    # Player
    player_max_health: int = 100
    player_attack_damage: int = 20
    player_speed: float = 200.0
    player_attack_range: float = 80.0
    player_attack_cooldown_ms: float = 500.0
    player_attack_duration_ms: float = 300.0
    player_stun_ms: float = 800.0
    player_invulnerability_ms: float = 1000.0
    player_block_damage_mult: float = 0.1
    player_death_fade_ms: float = 1000.0
    player_frame_height: float = 64.0
    player_scale: float = 2.75
    player_start_x: float = 200.0
    player_start_ground_ratio: float = 0.6  # 60% down the walkable band
    player_hit_radius: float = 30.0
    diagonal_factor: float = 0.707

    # Leveling
    base_experience_to_level: int = 100
    experience_multiplier: float = 1.5
    level_bonus_health: int = 10
    level_bonus_damage: int = 2
    level_bonus_speed: float = 5.0
    speed_cap: float = 300.0

    # Enemy (melee baseline)
    enemy_max_health: int = 80
    enemy_attack_damage: int = 15
    enemy_speed: float = 100.0
    enemy_attack_range: float = 70.0
    enemy_detection_range: float = 200.0
    enemy_attack_cooldown_ms: float = 2000.0
    enemy_action_cooldown_ms: float = 1500.0
    enemy_windup_ms: float = 800.0
    enemy_attack_duration_ms: float = 600.0
    enemy_hurt_ms: float = 400.0
    enemy_invulnerability_ms: float = 500.0
    enemy_block_ms: float = 800.0
    enemy_block_chance: float = 0.3
    enemy_block_success_rate: float = 0.7
    enemy_block_damage_mult: float = 0.3
    enemy_vertical_tolerance: float = 28.0
    enemy_removal_delay_ms: float = 2000.0
    enemy_item_drop_chance: float = 0.35
    enemy_frame_height: float = 96.0
    enemy_base_experience: int = 25
    enemy_experience_level_scale: float = 0.3

    # Ranged enemy
    ranged_attack_range: float = 300.0
    ranged_detection_margin: float = 100.0  # Extended detection band beyond attack range
    ranged_min_attack_distance: float = 120.0
    ranged_retreat_speed_mult: float = 0.8
    ranged_health_mult: float = 0.8
    ranged_experience_mult: float = 1.2
    projectile_speed: float = 200.0
    projectile_range: float = 400.0
    projectile_lead_factor: float = 0.3
    projectile_spawn_offset: float = 30.0
    projectile_radius: float = 8.0
    projectile_lifetime_ms: float = 5000.0

    # Spawning
    max_enemies: int = 3
    spawn_interval: float = 400.0          # Distance between spawn columns
    spawn_trigger_distance: float = 200.0
    spawn_offset_from_edge: float = 50.0
    ranged_spawn_chance: float = 0.3

    # Inventory
    inventory_slots: int = 6

    # Logging
    log_level: str = "INFO"

    # -- derived geometry --

    @property
    def walkable_top(self) -> float:
        return self.screen_height * (1 - self.ground_height_ratio)

    @property
    def walkable_height(self) -> float:
        return self.screen_height * self.ground_height_ratio

    @property
    def walkable_bottom(self) -> float:
        return self.walkable_top + self.walkable_height

    @property
    def player_start_y(self) -> float:
        return self.walkable_top + self.walkable_height * self.player_start_ground_ratio
