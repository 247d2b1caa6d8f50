# =============================================================================
# Sim World - Arena
# =============================================================================
# Owns every item, assigns ids and placement, answers collision and sensor
# queries, ticks the robots and reads/writes the text snapshot format:
#
#   <width> <height>
#   <Kind> <x> <y> <radius>      (one line per item, in z-order)
# =============================================================================

import math
import numpy as np
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from loguru import logger

from sim_model import ArenaItem, ItemKind, Obstacle, Segment
from sim_model.items import require_positive
from sim_model.config import DEFAULT_ROBOT_RADIUS, DEFAULT_OBSTACLE_RADIUS
from sim_agents import BaseRobot, robot_class_for

from .config import (
    DEFAULT_ARENA_WIDTH,
    DEFAULT_ARENA_HEIGHT,
    PLACEMENT_MAX_ATTEMPTS,
    DEFAULT_SPEED_MULTIPLIER
)
from .storage import read_text_file, write_text_file


@dataclass
class LoadReport:
    """Outcome of Arena.load(): dimensions after the call and skipped lines."""
    ok: bool
    width: float
    height: float
    loaded: int = 0
    errors: List[str] = field(default_factory=list)


def _format_number(value: float) -> str:
    return repr(float(value))


def _parse_number(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"non-finite number {token!r}")
    return value


def default_radius(kind: ItemKind) -> float:
    return DEFAULT_OBSTACLE_RADIUS if kind is ItemKind.OBSTACLE else DEFAULT_ROBOT_RADIUS


class Arena:
    """
    Bounded 2D arena holding robots and obstacles.

    Items are kept in insertion order, which is both the drawing z-order and
    the tick order. Selection and hover are stored as item ids and resolved
    on access, so they read as None once the item is gone.
    """

    def __init__(self,
                 width: float = DEFAULT_ARENA_WIDTH,
                 height: float = DEFAULT_ARENA_HEIGHT,
                 seed: Optional[int] = None,
                 max_placement_attempts: int = PLACEMENT_MAX_ATTEMPTS):
        """
        Initialize an empty arena.

        Args:
            width: Arena width (> 0)
            height: Arena height (> 0)
            seed: Seed for placement and robot randomness (None = entropy)
            max_placement_attempts: Random samples tried per placement

        Raises:
            ValueError: On non-positive dimensions or attempt count
        """
        self._width = require_positive("width", width)
        self._height = require_positive("height", height)
        if max_placement_attempts < 1:
            raise ValueError(f"max_placement_attempts must be >= 1, got {max_placement_attempts}")
        self.max_placement_attempts = int(max_placement_attempts)
        self.rng = np.random.default_rng(seed)

        self._items: List[ArenaItem] = []
        self._by_id: Dict[int, ArenaItem] = {}
        self._next_id = 0
        self._selected_id: Optional[int] = None
        self._hovered_id: Optional[int] = None

        self.speed_multiplier = DEFAULT_SPEED_MULTIPLIER
        self.tick_count = 0

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def items(self) -> Tuple[ArenaItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def get_item(self, item_id: Optional[int]) -> Optional[ArenaItem]:
        if item_id is None:
            return None
        return self._by_id.get(item_id)

    def robots(self) -> List[BaseRobot]:
        return [item for item in self._items if isinstance(item, BaseRobot)]

    def obstacles(self) -> List[Obstacle]:
        return [item for item in self._items if isinstance(item, Obstacle)]

    # =========================================================================
    # Construction / placement
    # =========================================================================

    def _build(self, kind: ItemKind, x: float, y: float, radius: float) -> ArenaItem:
        """Construct an item with the next id; the id is only consumed on success."""
        if kind is ItemKind.OBSTACLE:
            item = Obstacle(self._next_id, x, y, radius)
        else:
            item = robot_class_for(kind)(self._next_id, x, y, radius=radius, rng=self.rng)
            item.set_speed_multiplier(self.speed_multiplier)
        self._next_id += 1
        return item

    def _append(self, item: ArenaItem) -> ArenaItem:
        self._items.append(item)
        self._by_id[item.id] = item
        logger.debug("Added {}", item)
        return item

    def _clearance(self, x: float, y: float, radius: float) -> float:
        """Smallest gap between a circle at (x, y) and any existing item."""
        gaps = [math.hypot(item.x - x, item.y - y) - (radius + item.radius) for item in self._items]
        return min(gaps) if gaps else math.inf

    def find_free_position(self, radius: float) -> Tuple[float, float]:
        """
        Sample uniform positions until one does not overlap any item.

        After max_placement_attempts samples the sample with the largest
        clearance is returned instead, so placement always terminates.
        """
        best = None
        best_clearance = -math.inf
        for _ in range(self.max_placement_attempts):
            x = float(self.rng.uniform(0.0, self._width))
            y = float(self.rng.uniform(0.0, self._height))
            if not self.is_colliding(x, y, radius):
                return x, y
            clearance = self._clearance(x, y, radius)
            if clearance > best_clearance:
                best_clearance = clearance
                best = (x, y)

        logger.warning(
            "No free position after {} attempts; placing at ({:.1f}, {:.1f}) with overlap {:.1f}",
            self.max_placement_attempts, best[0], best[1], -best_clearance
        )
        return best

    def add_item(self, kind: ItemKind) -> ArenaItem:
        """Add an item of the given kind at a random free position."""
        radius = default_radius(kind)
        x, y = self.find_free_position(radius)
        return self._append(self._build(kind, x, y, radius))

    def place_item(self, kind: ItemKind, x: float, y: float,
                   radius: Optional[float] = None) -> ArenaItem:
        """Add an item at an explicit position without an overlap check."""
        if radius is None:
            radius = default_radius(kind)
        return self._append(self._build(kind, x, y, radius))

    def add_robot(self) -> ArenaItem:
        return self.add_item(ItemKind.ROBOT)

    def add_chaser_robot(self) -> ArenaItem:
        return self.add_item(ItemKind.CHASER_ROBOT)

    def add_beam_robot(self) -> ArenaItem:
        return self.add_item(ItemKind.BEAM_ROBOT)

    def add_bump_robot(self) -> ArenaItem:
        return self.add_item(ItemKind.BUMP_ROBOT)

    def add_smart_robot(self) -> ArenaItem:
        return self.add_item(ItemKind.SMART_ROBOT)

    def add_obstacle(self) -> ArenaItem:
        return self.add_item(ItemKind.OBSTACLE)

    # =========================================================================
    # Queries
    # =========================================================================

    def is_colliding(self, x: float, y: float, radius: float,
                     exclude_id: Optional[int] = None) -> bool:
        """
        True if a circle at (x, y) overlaps any item except exclude_id.

        Overlap is strict: circles that exactly touch do not collide.
        """
        for item in self._items:
            if exclude_id is not None and item.id == exclude_id:
                continue
            dx = item.x - x
            dy = item.y - y
            reach = radius + item.radius
            if dx * dx + dy * dy < reach * reach:
                return True
        return False

    def is_overlapping(self, x: float, y: float, radius: float) -> bool:
        return self.is_colliding(x, y, radius)

    def find_item_at(self, x: float, y: float) -> Optional[ArenaItem]:
        """Topmost item whose bounding circle contains the point."""
        for item in reversed(self._items):
            if item.contains_point(x, y):
                return item
        return None

    def intersects_any_obstacle(self, segment: Segment) -> bool:
        return any(obstacle.blocks(segment) for obstacle in self.obstacles())

    def is_obstacle_nearby(self, robot: BaseRobot) -> bool:
        """True if any obstacle is within the robot's radius + sensor range."""
        reach = robot.radius + robot.sensor_range
        return any(robot.distance_to(obstacle) <= reach + obstacle.radius
                   for obstacle in self.obstacles())

    def counts(self) -> Dict[str, int]:
        robots = len(self.robots())
        return {'robots': robots, 'obstacles': len(self._items) - robots}

    def status(self) -> str:
        return "".join(item.describe() + "\n" for item in self._items)

    # =========================================================================
    # Selection / hover
    # =========================================================================

    def _resolve(self, item: Optional[ArenaItem]) -> Optional[int]:
        if item is None or self._by_id.get(item.id) is not item:
            return None
        return item.id

    def set_selected(self, item: Optional[ArenaItem]) -> bool:
        """Select an item of this arena (None clears). False if item is foreign."""
        self._selected_id = self._resolve(item)
        return self._selected_id is not None

    def get_selected(self) -> Optional[ArenaItem]:
        return self.get_item(self._selected_id)

    def set_hovered(self, item: Optional[ArenaItem]) -> bool:
        self._hovered_id = self._resolve(item)
        return self._hovered_id is not None

    def get_hovered(self) -> Optional[ArenaItem]:
        return self.get_item(self._hovered_id)

    selected = property(get_selected)
    hovered = property(get_hovered)

    # =========================================================================
    # Mutation
    # =========================================================================

    def delete_item(self, item: Optional[ArenaItem]) -> bool:
        """Remove an item; selection/hover pointing at it are cleared."""
        if self._resolve(item) is None:
            return False
        self._items.remove(item)
        del self._by_id[item.id]
        if self._selected_id == item.id:
            self._selected_id = None
        if self._hovered_id == item.id:
            self._hovered_id = None
        logger.debug("Deleted {}", item)
        return True

    def delete_selected(self) -> bool:
        return self.delete_item(self.get_selected())

    def clear(self):
        self._items.clear()
        self._by_id.clear()
        self._selected_id = None
        self._hovered_id = None
        logger.debug("Arena cleared")

    def move_item(self, item: ArenaItem, x: float, y: float) -> bool:
        """
        Reposition an item (drag or keyboard), clamped inside the walls.

        Returns:
            False if the item is not in the arena or the target collides
        """
        if self._resolve(item) is None:
            return False
        r = item.radius
        x = float(np.clip(x, r, self._width - r))
        y = float(np.clip(y, r, self._height - r))
        if self.is_colliding(x, y, r, exclude_id=item.id):
            return False
        item.x = x
        item.y = y
        return True

    def nudge_selected(self, dx: float, dy: float) -> bool:
        """Move the selected robot by (dx, dy); obstacles are not nudged."""
        selected = self.get_selected()
        if not isinstance(selected, BaseRobot):
            return False
        return self.move_item(selected, selected.x + dx, selected.y + dy)

    # =========================================================================
    # Simulation
    # =========================================================================

    def move_all(self):
        """
        Advance every robot by one tick, in insertion order.

        Robots later in the order see the already-updated positions of
        earlier ones within the same tick.
        """
        for item in list(self._items):
            if isinstance(item, BaseRobot):
                item.tick(self)
        self.tick_count += 1

    def update_simulation_speed(self, multiplier: float):
        """Scale every robot's base speed; also applies to robots added later."""
        self.speed_multiplier = require_positive("multiplier", multiplier)
        for robot in self.robots():
            robot.set_speed_multiplier(self.speed_multiplier)

    # =========================================================================
    # Serialization
    # =========================================================================

    def save(self) -> str:
        lines = [f"{_format_number(self._width)} {_format_number(self._height)}"]
        for item in self._items:
            kind, x, y, radius = item.to_record()
            lines.append(f"{kind} {_format_number(x)} {_format_number(y)} {_format_number(radius)}")
        return "\n".join(lines) + "\n"

    @staticmethod
    def _parse_dimensions(line: str) -> Optional[Tuple[float, float]]:
        fields = line.split()
        if len(fields) != 2:
            return None
        try:
            width, height = (_parse_number(v) for v in fields)
        except ValueError:
            return None
        if width <= 0 or height <= 0:
            return None
        return width, height

    def load(self, text: Optional[str]) -> LoadReport:
        """
        Replace the arena contents with a saved snapshot.

        A bad dimension line rejects the whole load and leaves items and size
        untouched. Bad item lines (wrong field count, unknown kind, bad
        numbers, non-positive radius) are skipped and listed in the report.
        Selection and hover are cleared in every case. Robots get fresh
        behaviour state (new random heading, empty memories).
        """
        self._selected_id = None
        self._hovered_id = None

        if not text or not text.strip():
            logger.error("No data to load")
            return LoadReport(ok=False, width=self._width, height=self._height,
                              errors=["No data to load"])

        lines = text.splitlines()
        dims = self._parse_dimensions(lines[0])
        if dims is None:
            message = f"Invalid arena dimensions: {lines[0]!r}"
            logger.error(message)
            return LoadReport(ok=False, width=self._width, height=self._height,
                              errors=[message])

        self.clear()
        self._width, self._height = dims
        report = LoadReport(ok=True, width=self._width, height=self._height)

        for lineno, line in enumerate(lines[1:], start=2):
            if not line.strip():
                continue
            error = self._load_item_line(lineno, line)
            if error is None:
                report.loaded += 1
            else:
                logger.warning(error)
                report.errors.append(error)

        logger.info("Loaded {}x{} arena with {} items ({} skipped)",
                    self._width, self._height, report.loaded, len(report.errors))
        return report

    def _load_item_line(self, lineno: int, line: str) -> Optional[str]:
        """Add one item from a snapshot line; returns an error message or None."""
        fields = line.split()
        if len(fields) != 4:
            return f"Invalid item format at line {lineno}: expected 4 fields, got {len(fields)}"

        kind = ItemKind.parse(fields[0])
        if kind is None:
            return f"Unknown item type at line {lineno}: {fields[0]}"

        try:
            x, y, radius = (_parse_number(v) for v in fields[1:])
            self._append(self._build(kind, x, y, radius))
        except ValueError as exc:
            return f"Invalid item values at line {lineno}: {exc}"
        return None

    def save_to_file(self, filename: Union[str, Path]) -> bool:
        return write_text_file(filename, self.save())

    def load_from_file(self, filename: Union[str, Path]) -> LoadReport:
        """Load a snapshot file; an unreadable file leaves the arena untouched."""
        text = read_text_file(filename)
        if text is None:
            return LoadReport(ok=False, width=self._width, height=self._height,
                              errors=[f"Could not read {filename}"])
        return self.load(text)
