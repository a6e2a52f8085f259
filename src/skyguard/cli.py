"""Headless SkyGuard runner.

Initializes a scenario, ticks it at a fixed frame rate, and prints the
statistics snapshot every ``--report-every`` ticks.

Usage:
    skyguard-sim --map city --friendly 10 --hostile 8 --ticks 600
    skyguard-sim --formation arrowhead --jamming --no-comms --seed 7
    skyguard-sim --map-file maps/harbor.json --ticks 300 --json
"""

from __future__ import annotations

import argparse
import json
import random
import sys

from loguru import logger
from pydantic import ValidationError

from skyguard.comms.event_bus import EventBus
from skyguard.config import settings
from skyguard.simulation import (
    Formation,
    SimulationConfig,
    SimulationEngine,
    StatsSnapshot,
    list_map_presets,
    load_map_preset,
    register_map_preset,
)


def _format_snapshot(tick: int, snap: StatsSnapshot) -> str:
    return (
        f"[tick {tick:5d}] engaged={snap.engaged_count:2d} "
        f"threats={snap.threats_in_range:2d} "
        f"neutralized={snap.eliminated_total:3d} "
        f"casualties={snap.friendly_losses:3d} "
        f"integrity={snap.integrity_percent:3d}%"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SkyGuard drone-swarm defense simulation")
    parser.add_argument("--map", type=str, default=settings.default_map,
                        help=f"Map preset ({', '.join(list_map_presets())})")
    parser.add_argument("--map-file", type=str, default=None,
                        help="JSON map preset to load and use instead of --map")
    parser.add_argument("--friendly", type=int, default=settings.default_friendly_count,
                        help="Friendly interceptors")
    parser.add_argument("--hostile", type=int, default=settings.default_hostile_count,
                        help="Hostile interceptors")
    parser.add_argument("--friendly-bombers", type=int,
                        default=settings.default_friendly_bomber_count)
    parser.add_argument("--hostile-bombers", type=int,
                        default=settings.default_hostile_bomber_count)
    parser.add_argument("--formation", type=str, default=settings.default_formation,
                        choices=[f.value for f in Formation])
    parser.add_argument("--ticks", type=int, default=600, help="Frames to simulate")
    parser.add_argument("--rate", type=float, default=settings.tick_rate,
                        help="Frames per second (0 = as fast as possible)")
    parser.add_argument("--no-comms", action="store_true", help="Disable communication")
    parser.add_argument("--jamming", action="store_true", help="Enable jamming")
    parser.add_argument("--seed", type=int, default=None, help="Seed for repeatable runs")
    parser.add_argument("--report-every", type=int, default=60,
                        help="Print stats every N ticks")
    parser.add_argument("--json", action="store_true",
                        help="Print the final state as JSON instead of text")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)

    map_id = args.map
    if args.map_file:
        try:
            preset = load_map_preset(args.map_file)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Cannot load map file {args.map_file}: {e}")
            return 2
        register_map_preset(preset)
        map_id = preset.preset_id

    try:
        config = SimulationConfig(
            map_preset=map_id,
            friendly_count=args.friendly,
            hostile_count=args.hostile,
            friendly_bomber_count=args.friendly_bombers,
            hostile_bomber_count=args.hostile_bombers,
            formation=args.formation,
        )
    except ValidationError as e:
        logger.warning(f"Invalid scenario configuration: {e}")
        return 2

    rng = random.Random(args.seed) if args.seed is not None else None
    engine = SimulationEngine(EventBus(), rng=rng)
    engine.initialize(config)

    frame_interval = 1.0 / args.rate if args.rate > 0 else 0.0
    communication = not args.no_comms
    snap = engine.snapshot
    for i in range(1, args.ticks + 1):
        snap = engine.run(1, communication=communication, jamming=args.jamming,
                          frame_interval=frame_interval)
        if not args.json and args.report_every > 0 and i % args.report_every == 0:
            print(_format_snapshot(i, snap))
        if not engine.hostiles or not engine.assets:
            break

    if args.json:
        print(json.dumps(engine.get_state(), indent=2))
    else:
        print(_format_snapshot(engine.tick_count, snap))
        outcome = "DEFENDED" if engine.assets and not engine.hostiles else (
            "OVERRUN" if not engine.assets else "ONGOING")
        print(f"Outcome: {outcome} "
              f"({len(engine.destroyed_assets)} assets lost, "
              f"{engine.friendly_losses} drones lost)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
