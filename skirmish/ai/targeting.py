"""Targeting helpers: predictive aim and single-axis approach."""

from __future__ import annotations

import math

from skirmish.core.models import ZERO, Vector2


def predict_aim_point(
    shooter: Vector2,
    target: Vector2,
    target_velocity: Vector2,
    projectile_speed: float,
    lead_factor: float,
) -> Vector2:
    """Lead a moving target.

    ``target + target_velocity * (distance / projectile_speed) * lead_factor``.
    A stationary target (or a non-positive projectile speed) yields the
    target itself.
    """
    if projectile_speed <= 0 or target_velocity.is_zero:
        return target
    time_to_target = shooter.distance(target) / projectile_speed
    return target + target_velocity.scaled(time_to_target * lead_factor)


def direction_toward(origin: Vector2, target: Vector2) -> Vector2:
    return (target - origin).normalized()


def direction_away_from(origin: Vector2, threat: Vector2) -> Vector2:
    return (origin - threat).normalized()


def axis_priority_step(dx: float, dy: float, x_tolerance: float, y_tolerance: float, speed: float) -> Vector2:
    """Velocity along the one axis whose excess over its tolerance is larger.

    Returns the zero vector when both axes are already within tolerance.
    """
    excess_x = abs(dx) - x_tolerance
    excess_y = abs(dy) - y_tolerance
    if excess_x <= 0 and excess_y <= 0:
        return ZERO
    if excess_x >= excess_y:
        return Vector2(math.copysign(speed, dx), 0.0)
    return Vector2(0.0, math.copysign(speed, dy))


def is_vertically_aligned(dy: float, tolerance: float) -> bool:
    return abs(dy) <= tolerance
