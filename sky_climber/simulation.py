from __future__ import annotations

import math

from sky_climber import config
from sky_climber.entities import ItemKind
from sky_climber.session import GameState
from sky_climber.state_machine import game_clear, game_over


def target_speed(mode, distance, speed_bonus=0.0):
    if mode == config.MODE_CHALLENGE:
        level = math.floor(distance / config.CHALLENGE_SPEED_INTERVAL)
        return config.BASE_SPEED + level * config.SPEED_STEP + speed_bonus
    level = math.floor(distance / config.MISSION_SPEED_INTERVAL)
    return min(config.MISSION_SPEED_CAP, config.BASE_SPEED + level * config.SPEED_STEP)


def spawn_interval(speed):
    return config.SPAWN_FACTOR / (speed * config.SPAWN_SPEED_MULT)


def take_damage(session, now):
    """Lose a life unless invulnerable. Returns True when the hit landed."""
    player = session.player
    if player.is_invulnerable(now):
        return False
    player.hurt()
    player.invulnerable_until = now + config.INVULNERABLE_MS
    session.flash_until = now + config.DAMAGE_FLASH_MS
    if player.lives <= 0:
        game_over(session)
    return True


def apply_item(session, item):
    player = session.player
    if item.kind is ItemKind.HEART:
        player.heal()
    elif item.kind is ItemKind.SCORE:
        session.challenge_score += config.SCORE_ITEM_POINTS
    elif item.kind is ItemKind.SPEED:
        session.game_speed += config.SPEED_ITEM_BONUS
        session.speed_bonus += config.SPEED_ITEM_BONUS
    elif item.kind is ItemKind.WARP:
        rng = session.spawner.np_random
        player.x = rng.random() * (session.cfg.width - player.width)
        player.y = rng.random() * (session.cfg.height - player.height)
    else:
        raise ValueError(f"unhandled item kind: {item.kind!r}")


def step(session, controls, now):
    """Advance one tick. Does nothing unless the session is PLAYING."""
    if session.state is not GameState.PLAYING:
        return

    cfg = session.cfg
    player = session.player

    _move_player(player, controls, cfg)

    session.distance += session.game_speed / config.TICKS_PER_SECOND

    if session.mode == config.MODE_MISSION and session.distance >= config.GOAL_DISTANCE:
        game_clear(session)
        return

    target = target_speed(session.mode, session.distance, session.speed_bonus)
    if session.game_speed < target:
        session.game_speed += config.SPEED_EASE

    for tile in session.windows:
        tile.scroll(session.game_speed, cfg.height)

    _update_spawner(session)
    if not _update_obstacles(session, now):
        return
    _update_items(session)


def _move_player(player, controls, cfg):
    if controls.left:
        player.x -= player.speed
    if controls.right:
        player.x += player.speed
    if controls.up:
        player.y -= player.speed
    if controls.down:
        player.y += player.speed

    if controls.up:
        player.anim_speed = config.ANIM_SPEED_UP
    elif controls.down:
        player.anim_speed = config.ANIM_SPEED_DOWN
    else:
        player.anim_speed = config.ANIM_SPEED_IDLE
    player.anim_frame += player.anim_speed

    player.x = min(max(player.x, 0), cfg.width - player.width)
    player.y = min(max(player.y, 0), cfg.height - player.height)


def _update_spawner(session):
    session.frame_count += 1
    if session.frame_count <= spawn_interval(session.game_speed):
        return
    spawner = session.spawner
    session.obstacles.append(spawner.spawn_obstacle(session.theme))
    item = spawner.roll_item(session.mode)
    if item is not None:
        session.items.append(item)
    session.frame_count = 0


def _update_obstacles(session, now):
    """Move obstacles and resolve hits. Returns False once the run has ended."""
    height = session.cfg.height
    kept = []
    for i, obs in enumerate(session.obstacles):
        obs.y += session.game_speed + obs.speed_offset
        obs.rotation += obs.rot_speed

        if obs.y > height:
            if session.mode == config.MODE_CHALLENGE and not obs.processed:
                obs.processed = True
                session.challenge_score += config.AVOID_POINTS
            continue

        if session.player.overlaps(obs, inset=config.HITBOX_INSET):
            take_damage(session, now)
            if session.state is not GameState.PLAYING:
                # Obstacles after this one never moved this tick; keep them as they are.
                session.obstacles = kept + session.obstacles[i + 1:]
                return False
            continue

        kept.append(obs)
    session.obstacles = kept
    return True


def _update_items(session):
    height = session.cfg.height
    player = session.player
    kept = []
    for item in session.items:
        item.y += session.game_speed
        if item.y > height:
            continue
        if player.overlaps(item):
            apply_item(session, item)
            continue
        kept.append(item)
    session.items = kept
