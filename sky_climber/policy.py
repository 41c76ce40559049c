from sky_climber.entities import ItemKind

# Obstacles closer than this (in px, measured from the player's top) are threats.
THREAT_RANGE = 220


def policy(env):
    # Strategy: find the closest obstacle falling towards the player's column and
    # sidestep away from its centre. With nothing threatening, drift towards the
    # nearest useful item (warps are skipped since they drop the player anywhere),
    # otherwise drift back to the bottom-centre start position.
    session = env.session
    player = session.player
    px = player.x + player.width / 2
    py = player.y

    threat = None
    for obs in session.obstacles:
        above = py - (obs.y + obs.height)
        if above < -player.height or above > THREAT_RANGE:
            continue
        if obs.x - player.width > player.x + player.width or obs.x + obs.width + player.width < player.x:
            continue
        if threat is None or obs.y > threat.y:
            threat = obs

    if threat is not None:
        ox = threat.x + threat.width / 2
        if px <= ox and player.x > 0:
            return [3, 0, 0]  # Move left
        if px > ox and player.x + player.width < env.SCREEN_WIDTH:
            return [4, 0, 0]  # Move right
        return [3, 0, 0] if px > ox else [4, 0, 0]

    targets = [item for item in session.items if item.kind is not ItemKind.WARP and item.y < py]
    if targets:
        item = min(targets, key=lambda i: abs(i.x + i.width / 2 - px))
        ix = item.x + item.width / 2
        if abs(ix - px) > player.speed:
            return [3, 0, 0] if ix < px else [4, 0, 0]

    home_x = env.SCREEN_WIDTH / 2
    home_y = env.SCREEN_HEIGHT - player.height - 50
    if py < home_y - player.speed:
        return [2, 0, 0]  # Move down
    if abs(home_x - px) > player.speed:
        return [3, 0, 0] if home_x < px else [4, 0, 0]
    return [0, 0, 0]  # No movement
