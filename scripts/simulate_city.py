#!/usr/bin/env python3
"""
Synthesize a city layout, run the traffic overlay for a number of ticks and
log a short report. Optionally save the session as a project file that can be
loaded back with ``PlanningState.load_project``.

Example:
    python scripts/simulate_city.py --size 24 --terrain mountainous --ticks 120 --save city.json
"""

import argparse
import asyncio
from pathlib import Path

from urbansim import (CityParameters, Config, Logger, PlanningState,
                      ValidationError)


def main() -> int:
    parser = argparse.ArgumentParser(description='Synthesize a city and simulate traffic on its arterials.')
    parser.add_argument('--size', type=int, default=20, help='Grid edge length of the layout.')
    parser.add_argument('--terrain', type=str, default='flat', help='flat, hilly, coastal or mountainous.')
    parser.add_argument('--climate', type=str, default='temperate', help='temperate, tropical, arid or continental.')
    parser.add_argument('--density', type=float, default=2500, help='Population density per km².')
    parser.add_argument('--risk', type=float, default=25, help='Environmental risk, 0-100.')
    parser.add_argument('--ticks', type=int, default=60, help='Traffic ticks to simulate.')
    parser.add_argument('--generate', action='store_true', help='Run one generation pass before simulating.')
    parser.add_argument('--config', type=Path, default=None, help='YAML file overriding the packaged defaults.')
    parser.add_argument('--save', type=Path, default=None, help='Write the session as a project file.')
    args = parser.parse_args()

    config = Config(str(args.config) if args.config else None)
    Logger.configure_from(config)
    logger = Logger.get_logger('SimulateCity')

    try:
        params = CityParameters(size=args.size, population_density=args.density, climate=args.climate,
                                terrain=args.terrain, environmental_risk=args.risk)
    except ValidationError as e:
        parser.error(str(e))
    state = PlanningState(config, params)

    if args.generate:
        asyncio.run(state.generate_city_async(delay=0))

    for _ in range(args.ticks):
        state.tick()

    for line in state.report_lines():
        logger.info(line)
    metrics = state.metrics()
    network = state.utility_network()
    logger.info(f'Cells by kind: {metrics.kind_counts}')
    logger.info(f'Utilities: {len(network.power_edges)} power lines, {len(network.water_edges)} water lines, '
                f'{len(network.substations)} substations')
    for vehicle in state.traffic.vehicles[:4]:
        logger.info(f'{vehicle!r}')

    if args.save:
        state.save_project(str(args.save))
        logger.info(f'Saved project to {args.save}')
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
