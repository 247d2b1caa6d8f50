# =============================================================================
# SIMULATION - Headless Arena Runner
# =============================================================================
# Runs the robot arena without a display, coordinating:
# - sim_world:  Arena, scenario presets, snapshot files
# - sim_agents: robot behaviours ticked by the arena
# and records a per-tick trajectory log plus run metrics.
# =============================================================================

import os
import json
import argparse
from datetime import datetime
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from loguru import logger

from sim_model import ItemKind
from sim_agents import BumpRobot, ChaserRobot, SmartRobot
from sim_world import (
    Arena,
    ScenarioPresets,
    SCENARIOS,
    DEFAULT_ARENA_WIDTH,
    DEFAULT_ARENA_HEIGHT
)

LOG_COLUMNS = ['tick', 'id', 'kind', 'x', 'y', 'heading', 'speed',
               'analyzing', 'target_distance']

COUNT_FLAGS = {
    'robots': ItemKind.ROBOT,
    'chasers': ItemKind.CHASER_ROBOT,
    'beams': ItemKind.BEAM_ROBOT,
    'bumps': ItemKind.BUMP_ROBOT,
    'smarts': ItemKind.SMART_ROBOT,
    'obstacles': ItemKind.OBSTACLE,
}


# =============================================================================
# Simulation Controller
# =============================================================================
class SimulationController:
    """
    Drives an arena for a fixed number of ticks and logs every robot's pose.

    The initial poses are logged at construction, then one row per robot is
    appended after each tick.
    """

    def __init__(self, arena: Arena, steps: int = 600):
        if steps < 0:
            raise ValueError(f"steps must be >= 0, got {steps}")
        self.arena = arena
        self.steps = steps
        self.log: List[dict] = []
        self._record()

    def _record(self):
        tick = self.arena.tick_count
        for robot in self.arena.robots():
            target_distance = np.nan
            if isinstance(robot, ChaserRobot):
                target = robot.target(self.arena)
                if target is not None:
                    target_distance = robot.distance_to(target)
            self.log.append({
                'tick': tick,
                'id': robot.id,
                'kind': robot.kind.value,
                'x': robot.x,
                'y': robot.y,
                'heading': robot.heading,
                'speed': robot.speed,
                'analyzing': isinstance(robot, SmartRobot) and robot.is_analyzing,
                'target_distance': target_distance
            })

    def step(self) -> int:
        """Advance one tick and log it. Returns the arena tick count."""
        self.arena.move_all()
        self._record()
        return self.arena.tick_count

    def run(self) -> pd.DataFrame:
        for _ in range(self.steps):
            self.step()
        logger.info("Simulation finished after {} ticks", self.arena.tick_count)
        return self.frame()

    def frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.log, columns=LOG_COLUMNS)

    def compute_metrics(self) -> dict:
        df = self.frame()
        metrics = {
            'ticks': int(self.arena.tick_count),
            'counts': self.arena.counts(),
            'path_length': {},
            'bump_contacts': int(sum(robot.contact_count for robot in self.arena.robots()
                                     if isinstance(robot, BumpRobot))),
            'smart_analyzing_ticks': 0,
            'chaser_mean_target_distance': None
        }

        if df.empty:
            return metrics

        df = df.sort_values(['id', 'tick'])
        step_lengths = np.hypot(df.groupby('id')['x'].diff(), df.groupby('id')['y'].diff())
        per_robot = step_lengths.fillna(0.0).groupby(df['id']).sum()
        kinds = df.groupby('id')['kind'].first()
        per_kind = per_robot.groupby(kinds).mean()
        metrics['path_length'] = {kind: float(length) for kind, length in per_kind.items()}

        smart = df[df['kind'] == ItemKind.SMART_ROBOT.value]
        metrics['smart_analyzing_ticks'] = int(smart['analyzing'].sum())

        distances = df['target_distance'].dropna()
        if not distances.empty:
            metrics['chaser_mean_target_distance'] = float(distances.mean())

        return metrics

    def save_logs(self, log_dir: str = "log") -> Dict[str, str]:
        """
        Save the trajectory log (CSV), run metrics (JSON) and final snapshot.

        Returns:
            Mapping of output kind to written file path
        """
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        os.makedirs(log_dir, exist_ok=True)
        paths = {}

        csv_file = os.path.join(log_dir, f"trajectory_log_{timestamp}.csv")
        self.frame().to_csv(csv_file, index=False, encoding='utf-8')
        paths['csv'] = csv_file
        logger.info("Log saved: {}", csv_file)

        json_file = os.path.join(log_dir, f"run_metrics_{timestamp}.json")
        output = {
            'timestamp': datetime.now().isoformat(),
            'arena': {'width': self.arena.width, 'height': self.arena.height},
            'metrics': self.compute_metrics()
        }
        with open(json_file, 'w', encoding='utf-8') as f:
            json.dump(output, f, indent=2, ensure_ascii=False, default=str)
        paths['metrics'] = json_file
        logger.info("Metrics saved: {}", json_file)

        snapshot_file = os.path.join(log_dir, f"arena_{timestamp}.txt")
        if self.arena.save_to_file(snapshot_file):
            paths['snapshot'] = snapshot_file

        return paths


# =============================================================================
# Argument Parsing
# =============================================================================
def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog='robot-arena',
        description="""
============================================================
  ROBOT ARENA SIMULATION - HEADLESS RUNNER
============================================================

  Populates a bounded 2D arena with obstacles and robots, ticks it
  for a fixed number of steps and exports the trajectories.

  ROBOT VARIANTS:

    Robot        - Whisker line ahead; reverses when it crosses an
                   obstacle, bounces off walls.
    ChaserRobot  - Steps straight toward the nearest non-chaser robot.
    BeamRobot    - Fan of 5 beams over 90 degrees; steers to the first
                   clear beam, reverses if all are blocked.
    BumpRobot    - Contact only; rolls back and deflects ~180 degrees.
    SmartRobot   - 8-ray sensor ring with danger memory; turns toward
                   the safest heading and stops to scan when blocked.

  SCENARIOS (--scenario):

    empty      - Nothing placed
    obstacles  - Obstacles only
    mixed      - One robot of every variant among obstacles (default)
    pursuit    - Chasers hunting basic robots
    custom     - Counts taken from --robots/--chasers/... options
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES:
  robot-arena                                   # Mixed scenario, 600 ticks
  robot-arena --scenario pursuit --seed 7       # Reproducible pursuit run
  robot-arena --scenario custom --smarts 3 --obstacles 20
  robot-arena --load arena.txt --steps 200 --save after.txt

NOTE: --load replaces the scenario; the arena size comes from the file.
"""
    )

    parser.add_argument(
        '--scenario',
        type=str,
        choices=sorted(SCENARIOS) + ['custom'],
        default='mixed',
        metavar='NAME',
        help='Scenario preset: empty, obstacles, mixed, pursuit, custom (default: mixed)'
    )

    for flag, kind in COUNT_FLAGS.items():
        parser.add_argument(
            f'--{flag}',
            type=int,
            default=0,
            metavar='N',
            help=f'Number of {kind.value} items for the custom scenario (default: 0)'
        )

    parser.add_argument(
        '--width',
        type=float,
        default=DEFAULT_ARENA_WIDTH,
        metavar='PX',
        help=f'Arena width (default: {DEFAULT_ARENA_WIDTH})'
    )

    parser.add_argument(
        '--height',
        type=float,
        default=DEFAULT_ARENA_HEIGHT,
        metavar='PX',
        help=f'Arena height (default: {DEFAULT_ARENA_HEIGHT})'
    )

    parser.add_argument(
        '--steps',
        type=int,
        default=600,
        metavar='N',
        help='Number of ticks to simulate (default: 600)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        metavar='N',
        help='Random seed for placement and behaviour (default: random)'
    )

    parser.add_argument(
        '--speed',
        type=float,
        default=1.0,
        metavar='X',
        help='Simulation speed multiplier (default: 1.0)'
    )

    parser.add_argument(
        '--load',
        type=str,
        default=None,
        metavar='FILE',
        help='Load an arena snapshot instead of a scenario'
    )

    parser.add_argument(
        '--save',
        type=str,
        default=None,
        metavar='FILE',
        help='Save the final arena snapshot to FILE'
    )

    parser.add_argument(
        '--log-dir',
        type=str,
        default='log',
        metavar='DIR',
        help='Directory for trajectory CSV and metrics JSON (default: log)'
    )

    return parser.parse_args(argv)


def build_arena(args) -> Optional[Arena]:
    """Create and populate the arena from parsed arguments; None if loading failed."""
    arena = Arena(width=args.width, height=args.height, seed=args.seed)

    if args.load:
        report = arena.load_from_file(args.load)
        if not report.ok:
            logger.error("Could not load {}: {}", args.load, "; ".join(report.errors))
            return None
        logger.info("Loaded {} items from {}", report.loaded, args.load)
    elif args.scenario == 'custom':
        counts = {kind: getattr(args, flag) for flag, kind in COUNT_FLAGS.items()}
        info = ScenarioPresets.scenario_custom(arena, counts)
        logger.info("Scenario {} initialized: {}", info['type'], info['counts'])
    else:
        info = SCENARIOS[args.scenario](arena)
        logger.info("Scenario {} initialized: {}", info['type'], info['counts'])

    arena.update_simulation_speed(args.speed)
    return arena


# =============================================================================
# Main Entry Point
# =============================================================================
def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)

    logger.info("=" * 60)
    logger.info("ROBOT ARENA SIMULATION - HEADLESS RUNNER")
    logger.info("=" * 60)

    arena = build_arena(args)
    if arena is None:
        return 1

    counts = arena.counts()
    logger.info("Arena {}x{}: {} robots, {} obstacles",
                arena.width, arena.height, counts['robots'], counts['obstacles'])

    controller = SimulationController(arena, steps=args.steps)
    controller.run()
    controller.save_logs(args.log_dir)

    if args.save and not arena.save_to_file(args.save):
        return 1

    metrics = controller.compute_metrics()
    logger.info("=" * 60)
    logger.info("METRICS SUMMARY")
    logger.info("=" * 60)
    for kind, length in metrics['path_length'].items():
        logger.info("Mean path length {}: {:.1f}", kind, length)
    logger.info("Bump contacts: {}", metrics['bump_contacts'])
    logger.info("Smart analysing ticks: {}", metrics['smart_analyzing_ticks'])
    if metrics['chaser_mean_target_distance'] is not None:
        logger.info("Chaser mean distance to target: {:.1f}", metrics['chaser_mean_target_distance'])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
