from __future__ import annotations

from sky_climber.entities import BackgroundTile, Box, Player


def test_overlap_inside_inset_margin_is_not_a_hit() -> None:
    player = Box(0, 0, 30, 50)
    # Overlaps the player by 10px horizontally, all of it inside the two 8px margins.
    obs = Box(20, 0, 40, 40)
    assert player.overlaps(obs)
    assert not player.overlaps(obs, inset=8)


def test_overlap_past_inset_margin_is_a_hit() -> None:
    player = Box(0, 0, 30, 50)
    obs = Box(10, 10, 40, 40)
    assert player.overlaps(obs, inset=8)


def test_touching_edges_do_not_overlap() -> None:
    assert not Box(0, 0, 30, 30).overlaps(Box(30, 0, 30, 30))
    assert not Box(0, 0, 30, 30).overlaps(Box(0, 30, 30, 30))


def test_player_lives_are_clamped() -> None:
    p = Player(0, 0, 30, 50)
    p.heal()
    assert p.lives == p.max_lives
    for _ in range(5):
        p.hurt()
    assert p.lives == 0


def test_background_tile_wraps_past_bottom() -> None:
    tile = BackgroundTile(y=700)
    tile.scroll(10, height=720)
    assert tile.y == 710
    tile.scroll(20, height=720)
    assert tile.y == -150
