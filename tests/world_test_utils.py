from collections import deque

from byow.world import CORRIDOR, ROOM

WALKABLE = {int(ROOM), int(CORRIDOR)}


def bfs_reachable(world, start):
    """Return set of (x,y) walkable tiles reachable from start over ROOM/CORRIDOR."""
    if start is None:
        return set()
    sx, sy = start
    if world.get_tile(sx, sy) not in WALKABLE:
        return set()
    q = deque([start])
    vis = {start}
    while q:
        x, y = q.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if (nx, ny) not in vis and world.get_tile(nx, ny) in WALKABLE:
                vis.add((nx, ny))
                q.append((nx, ny))
    return vis


def existing_rooms(world):
    return [r for r in world.rooms if r.exists]


def add_room(world, x, y, w=3, h=3):
    """Append a room with the next dense id and carve its tiles."""
    from byow.world import Room

    room = Room(world.room_count, x, y, w, h)
    world.rooms.append(room)
    for cx, cy in room.cells():
        world.set_tile(cx, cy, ROOM)
    return room
