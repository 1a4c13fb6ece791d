import argparse
import os
import sys
import time

from report import format_cycle
from simulator import ConfigError, LoadError, Simulator
from workload import load_tasks

# The original console simulator paused one second per cycle
DEFAULT_CYCLE_DELAY = 0.0


def cycle_delay():
    value = os.environ.get("SIM_CYCLE_DELAY")
    if value is None:
        return DEFAULT_CYCLE_DELAY
    try:
        return max(0.0, float(value))
    except ValueError:
        raise ConfigError(f"SIM_CYCLE_DELAY must be a number of seconds, got {value!r}") from None


def build_parser():
    parser = argparse.ArgumentParser(description="Multi-processor task scheduling simulator")
    parser.add_argument("tasks_file", help="task list: a count line, then 'creation execution priority' per task")
    parser.add_argument("processors", type=int, help="number of processors")
    parser.add_argument("cycles", type=int, help="number of clock cycles to simulate")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        delay = cycle_delay()
        sim = Simulator(num_processors=args.processors, num_cycles=args.cycles)
        sim.load_tasks(load_tasks(args.tasks_file))
    except (LoadError, ConfigError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    def print_cycle(report):
        print("\n".join(format_cycle(report)))
        if delay:
            time.sleep(delay)

    sim.run(on_cycle=print_cycle)
    return 0


if __name__ == "__main__":
    sys.exit(main())
