from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from pellet_planner.catalog import get_catalog
from pellet_planner.config import get_settings
from pellet_planner.engine import PlanningEngine
from pellet_planner.models import MeatType, WrapStrategyKey
from pellet_planner.persistence import create_settings_store
from pellet_planner.services import PlannerService

logger = logging.getLogger(__name__)

NO_PLAN_MESSAGE = "Enter a serve time (e.g. --serve 2024-07-04T18:00) to generate your plan."

# argparse dest -> PlanInputs field
_PLAN_FIELDS = {
    "meat": "meat_type",
    "weight": "weight",
    "temp": "temp",
    "serve": "serve_time",
    "rest": "rest_time",
    "prep": "prep_time",
    "wrap": "wrap_strategy",
    "wrap_temp": "wrap_temp",
    "target_temp": "target_temp",
    "spritz": "spritz_enabled",
    "spritz_start": "spritz_start",
    "spritz_interval": "spritz_interval",
    "spatchcock": "is_spatchcock",
    "fat_side_up": "fat_side_up",
}


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="pellet-planner",
        description="Work backwards from serve time to a pellet grill cook timeline.",
    )
    sub = ap.add_subparsers(dest="command")

    meats = [m.value for m in MeatType]
    wraps = [w.value for w in WrapStrategyKey]

    p = sub.add_parser("plan", help="Compute the cook timeline (default command)")
    p.add_argument("--meat", choices=meats, help="Meat type. Resets weight, rest, wrap and spritz defaults")
    p.add_argument("--weight", type=float, help="Weight in lbs")
    p.add_argument("--temp", type=int, help="Grill set temp (°F)")
    p.add_argument("--serve", help="Serve time, ISO-8601 (e.g. 2024-07-04T18:00)")
    p.add_argument("--rest", type=float, help="Rest minutes")
    p.add_argument("--prep", type=float, help="Prep buffer minutes")
    p.add_argument("--wrap", choices=wraps, help="Wrap strategy")
    p.add_argument("--wrap-temp", type=int, help="Internal temp to wrap at (°F)")
    p.add_argument("--target-temp", type=int, help="Internal finish temp (°F)")
    p.add_argument("--spritz", action=argparse.BooleanOptionalAction, default=None, help="Spritz during the cook")
    p.add_argument("--spritz-start", type=float, help="Minutes after cook start to begin spritzing")
    p.add_argument("--spritz-interval", type=float, help="Minutes between spritzes")
    p.add_argument("--spatchcock", action=argparse.BooleanOptionalAction, default=None, help="Poultry is butterflied")
    p.add_argument("--fat-side-up", action=argparse.BooleanOptionalAction, default=None, help="Brisket fat cap up")
    p.add_argument("--json", action="store_true", help="Print the plan as JSON")
    p.add_argument("--no-gear", action="store_true", help="Skip gear recommendations")

    sub.add_parser("meats", help="List meat types and their defaults")

    r = sub.add_parser("reset", help="Restore catalog defaults")
    r.add_argument("meat", nargs="?", choices=meats, help="Meat type (default: current)")
    return ap


def _build_service() -> PlannerService:
    return PlannerService(create_settings_store(), PlanningEngine(get_catalog()))


def _cmd_plan(args: argparse.Namespace, service: PlannerService) -> int:
    overrides = {
        field: getattr(args, dest)
        for dest, field in _PLAN_FIELDS.items()
        if getattr(args, dest, None) is not None
    }
    try:
        service.update(**overrides)
    except ValidationError as e:
        for err in e.errors():
            loc = ".".join(str(part) for part in err["loc"])
            print(f"Invalid {loc}: {err['msg']}", file=sys.stderr)
        return 2

    result = service.current_plan()
    if result is None:
        logger.debug("No plan: serve_time=%r weight=%r", service.inputs.serve_time, service.inputs.weight)
        print(NO_PLAN_MESSAGE)
        return 0

    products = [] if args.no_gear else service.catalog.affiliate_products(result.plan.affiliate_mode)
    if args.json:
        payload = result.model_dump(mode="json")
        payload["gear"] = [p.model_dump(mode="json") for p in products]
        print(json.dumps(payload, indent=2))
    else:
        print(result.to_text(products))
    return 0


def _cmd_meats(service: PlannerService) -> int:
    catalog = service.catalog
    for meat in catalog.meat_types():
        profile = catalog.get_meat_profile(meat)
        temps = ", ".join(str(t) for t in profile.supported_temps())
        print(f"{meat.value:<10} {profile.label}")
        print(
            f"{'':<10} {profile.default_weight:g} lb | temps: {temps} | rest {profile.rest.default}m "
            f"(max hold {profile.rest.max_hold}m) | finish {profile.default_target_temp}°F"
        )
    return 0


def _cmd_reset(args: argparse.Namespace, service: PlannerService) -> int:
    inputs = service.reset(args.meat)
    print(f"Reset to {inputs.meat_type.value} defaults.")
    return 0


def main(argv: list[str] | None = None, service: PlannerService | None = None) -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    ap = build_parser()
    args = ap.parse_args(argv)
    if args.command is None:
        args = ap.parse_args(["plan"])

    service = service or _build_service()
    if args.command == "meats":
        return _cmd_meats(service)
    if args.command == "reset":
        return _cmd_reset(args, service)
    return _cmd_plan(args, service)
