"""Unit tests for sim_world.arena: placement, queries, selection and ticking."""
import itertools

import pytest

from sim_model import ItemKind, Segment
from sim_agents import BaseRobot, Robot
from sim_world import Arena


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:

    @pytest.mark.parametrize("width, height", [(0, 600), (800, -1), (float('nan'), 600)])
    def test_invalid_dimensions_rejected(self, width, height):
        with pytest.raises(ValueError):
            Arena(width=width, height=height)

    def test_invalid_attempt_cap_rejected(self):
        with pytest.raises(ValueError):
            Arena(max_placement_attempts=0)

    def test_defaults(self):
        arena = Arena()
        assert (arena.width, arena.height) == (800.0, 600.0)
        assert len(arena) == 0
        assert arena.tick_count == 0


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------

class TestPlacement:

    def test_add_item_uses_default_radii(self, arena):
        assert arena.add_robot().radius == 20.0
        assert arena.add_obstacle().radius == 15.0

    @pytest.mark.parametrize("adder, cls_name", [
        ("add_robot", "Robot"),
        ("add_chaser_robot", "ChaserRobot"),
        ("add_beam_robot", "BeamRobot"),
        ("add_bump_robot", "BumpRobot"),
        ("add_smart_robot", "SmartRobot"),
        ("add_obstacle", "Obstacle"),
    ])
    def test_adders_create_matching_kind(self, arena, adder, cls_name):
        item = getattr(arena, adder)()
        assert type(item).__name__ == cls_name
        assert item.kind.value == cls_name
        assert arena.get_item(item.id) is item

    def test_random_placement_does_not_overlap(self, arena):
        for _ in range(15):
            arena.add_obstacle()
        for _ in range(5):
            arena.add_robot()
        for a, b in itertools.combinations(arena.items, 2):
            assert not a.intersects(b)

    def test_ids_are_unique_and_never_reused(self, arena):
        first = arena.add_obstacle()
        second = arena.add_obstacle()
        arena.delete_item(second)
        third = arena.add_obstacle()
        assert len({first.id, second.id, third.id}) == 3
        assert third.id > second.id

    def test_failed_construction_does_not_consume_id(self, arena):
        with pytest.raises(ValueError):
            arena.place_item(ItemKind.OBSTACLE, 10, 10, radius=-5)
        a = arena.place_item(ItemKind.OBSTACLE, 10, 10)
        b = arena.place_item(ItemKind.OBSTACLE, 100, 10)
        assert b.id == a.id + 1
        assert len(arena) == 2

    def test_saturated_arena_still_terminates(self):
        arena = Arena(width=50, height=50, seed=3, max_placement_attempts=5)
        for _ in range(10):
            arena.add_obstacle()
        assert len(arena) == 10

    def test_new_robots_get_heading_in_range(self, arena):
        for _ in range(20):
            robot = arena.add_robot()
            assert 0.0 <= robot.heading < 360.0


# ---------------------------------------------------------------------------
# Collision queries
# ---------------------------------------------------------------------------

class TestCollision:

    def test_touching_circles_do_not_collide(self, arena, obstacle):
        obstacle(100, 100)
        assert not arena.is_colliding(130, 100, 15)
        assert arena.is_colliding(129.9, 100, 15)

    def test_collision_is_symmetric(self, arena, obstacle):
        a = obstacle(100, 100)
        b = obstacle(125, 100)
        assert arena.is_colliding(a.x, a.y, a.radius, exclude_id=a.id)
        assert arena.is_colliding(b.x, b.y, b.radius, exclude_id=b.id)

    def test_exclude_id_skips_self(self, arena, obstacle):
        a = obstacle(100, 100)
        assert not arena.is_colliding(100, 100, 15, exclude_id=a.id)
        assert arena.is_colliding(100, 100, 15)
        assert arena.is_overlapping(100, 100, 15)

    def test_find_item_at_returns_topmost(self, arena, obstacle):
        bottom = obstacle(100, 100)
        top = obstacle(105, 100)
        assert arena.find_item_at(102, 100) is top
        assert arena.find_item_at(88, 100) is bottom
        assert arena.find_item_at(400, 400) is None

    def test_intersects_any_obstacle(self, arena, obstacle):
        obstacle(100, 100)
        assert arena.intersects_any_obstacle(Segment(60, 100, 140, 100))
        assert not arena.intersects_any_obstacle(Segment(0, 300, 800, 300))

    def test_robots_do_not_block_segments(self, arena, place):
        place(ItemKind.ROBOT, 100, 100)
        assert not arena.intersects_any_obstacle(Segment(60, 100, 140, 100))

    @pytest.mark.parametrize("obstacle_x, expected", [(480, True), (485, True), (490, False)])
    def test_obstacle_nearby_uses_sensor_range(self, arena, place, obstacle, obstacle_x, expected):
        robot = place(ItemKind.ROBOT, 400, 300)
        obstacle(obstacle_x, 300)
        assert arena.is_obstacle_nearby(robot) is expected


# ---------------------------------------------------------------------------
# Selection / hover
# ---------------------------------------------------------------------------

class TestSelection:

    def test_select_and_delete(self, arena, obstacle):
        item = obstacle(100, 100)
        assert arena.set_selected(item)
        assert arena.get_selected() is item
        assert arena.selected is item
        assert arena.delete_selected()
        assert arena.get_selected() is None
        assert len(arena) == 0

    def test_deleting_hovered_item_clears_hover(self, arena, obstacle):
        item = obstacle(100, 100)
        arena.set_hovered(item)
        arena.set_selected(item)
        arena.delete_item(item)
        assert arena.get_hovered() is None
        assert arena.get_selected() is None

    def test_foreign_item_cannot_be_selected(self, arena):
        other = Arena(seed=1).add_obstacle()
        assert not arena.set_selected(other)
        assert arena.get_selected() is None
        assert not arena.delete_item(other)

    def test_clear_resets_selection(self, arena, obstacle):
        arena.set_selected(obstacle(100, 100))
        arena.clear()
        assert arena.get_selected() is None
        assert len(arena) == 0

    def test_delete_selected_without_selection(self, arena):
        assert not arena.delete_selected()


# ---------------------------------------------------------------------------
# Moving items
# ---------------------------------------------------------------------------

class TestMoveItem:

    def test_move_is_clamped_inside_walls(self, arena, obstacle):
        item = obstacle(100, 100)
        assert arena.move_item(item, -50, 1000)
        assert (item.x, item.y) == (15.0, 585.0)

    def test_move_into_other_item_rejected(self, arena, obstacle):
        item = obstacle(100, 100)
        obstacle(200, 100)
        assert not arena.move_item(item, 190, 100)
        assert (item.x, item.y) == (100.0, 100.0)

    def test_nudge_selected_robot(self, arena, place):
        robot = place(ItemKind.ROBOT, 400, 300)
        arena.set_selected(robot)
        assert arena.nudge_selected(5, -5)
        assert (robot.x, robot.y) == (405.0, 295.0)

    def test_obstacles_are_not_nudged(self, arena, obstacle):
        arena.set_selected(obstacle(100, 100))
        assert not arena.nudge_selected(5, 0)


# ---------------------------------------------------------------------------
# Ticking / speed / status
# ---------------------------------------------------------------------------

class TestSimulation:

    def test_move_all_ticks_every_robot(self, arena, place, obstacle):
        robot = place(ItemKind.ROBOT, 400, 300, heading=0)
        fixed = obstacle(100, 100)
        arena.move_all()
        assert robot.x == pytest.approx(402.0)
        assert (fixed.x, fixed.y) == (100.0, 100.0)
        assert arena.tick_count == 1

    def test_later_robots_see_earlier_moves_in_same_tick(self, arena, place):
        runner = place(ItemKind.ROBOT, 400, 300, heading=180)
        chaser = place(ItemKind.CHASER_ROBOT, 357, 300, heading=0)

        arena.move_all()

        # The runner already stepped to 398, so the chaser's step to 359
        # would overlap it and is abandoned.
        assert runner.x == pytest.approx(398.0)
        assert chaser.x == pytest.approx(357.0)

    def test_insertion_order_decides_same_tick_outcome(self, arena, place):
        chaser = place(ItemKind.CHASER_ROBOT, 357, 300, heading=0)
        runner = place(ItemKind.ROBOT, 400, 300, heading=180)

        arena.move_all()

        # The chaser moves first while the runner is still at 400.
        assert chaser.x == pytest.approx(359.0)
        assert runner.x == pytest.approx(398.0)

    def test_headings_stay_in_range(self):
        arena = Arena(seed=99)
        for kind in ItemKind:
            for _ in range(2):
                arena.add_item(kind)
        for _ in range(150):
            arena.move_all()
            for robot in arena.robots():
                assert 0.0 <= robot.heading < 360.0

    def test_speed_multiplier_applies_to_existing_and_new_robots(self, arena):
        before = arena.add_robot()
        arena.update_simulation_speed(2.5)
        after = arena.add_bump_robot()
        assert before.speed == pytest.approx(before.base_speed * 2.5)
        assert after.speed == pytest.approx(after.base_speed * 2.5)

    def test_per_robot_speed_survives_multiplier(self, arena):
        robot = arena.add_robot()
        robot.set_base_speed(4.0)
        assert robot.speed == pytest.approx(4.0)

        arena.update_simulation_speed(2.0)
        assert robot.speed == pytest.approx(8.0)

        robot.set_base_speed(1.0)
        assert robot.speed == pytest.approx(2.0)

    @pytest.mark.parametrize("speed", [0, -3, float('inf')])
    def test_invalid_per_robot_speed(self, arena, speed):
        robot = arena.add_robot()
        with pytest.raises(ValueError):
            robot.set_base_speed(speed)
        assert robot.speed == pytest.approx(2.0)

    @pytest.mark.parametrize("multiplier", [0, -1, float('nan')])
    def test_invalid_speed_multiplier(self, arena, multiplier):
        with pytest.raises(ValueError):
            arena.update_simulation_speed(multiplier)

    def test_counts_and_status(self, arena, place, obstacle):
        place(ItemKind.ROBOT, 400.4, 300)
        obstacle(100, 100.6)
        assert arena.counts() == {'robots': 1, 'obstacles': 1}
        assert arena.status() == "Robot at (400, 300)\nObstacle at (100, 101)\n"
        assert all(isinstance(robot, BaseRobot) for robot in arena.robots())
        assert isinstance(arena.robots()[0], Robot)
