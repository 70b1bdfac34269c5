"""Run with: python -m pellet_planner"""

from pellet_planner.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
