from __future__ import annotations

import argparse
import json

from scenario_content.core.config import SETTINGS
from scenario_content.tools.content_tools import tool_decode_slug, tool_encode_slug, tool_generate_content
from scenario_content.utils.locale_resources import YamlLocaleResourceProvider
from scenario_content.utils.logging import setup_logging
from scenario_content.utils.validators import validate_all_locales


def _inputs(args: argparse.Namespace) -> dict:
    return {
        "initial_amount": args.initial,
        "monthly_contribution": args.monthly,
        "annual_return": args.rate,
        "time_horizon": args.years,
    }


def _emit(out: dict) -> int:
    print(json.dumps(out, indent=2, ensure_ascii=False))
    return 2 if "error" in out else 0


def cmd_encode(args: argparse.Namespace) -> int:
    out = tool_encode_slug(_inputs(args), goal=args.goal)
    if args.json or "error" in out:
        return _emit(out)
    print(out["slug"])
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    return _emit(tool_decode_slug(args.slug))


def cmd_generate(args: argparse.Namespace) -> int:
    if args.slug:
        decoded = tool_decode_slug(args.slug)
        if "error" in decoded:
            return _emit(decoded)
        payload = {k: decoded[k] for k in ("initial_amount", "monthly_contribution", "annual_return", "time_horizon")}
        goal = decoded["goal"]
    else:
        payload, goal = _inputs(args), args.goal

    out = tool_generate_content({"inputs": payload, "locale": args.locale, "goal": goal})
    if args.json or "error" in out:
        return _emit(out)
    for name, text in out.items():
        if name == "market_data":
            continue
        print(f"===== {name} =====")
        print(text)
        print()
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    provider = YamlLocaleResourceProvider(args.locales_dir or SETTINGS.locales_dir)
    reports = validate_all_locales(provider)

    if args.json:
        print(json.dumps({loc: rep.model_dump() for loc, rep in reports.items()}, indent=2))
    else:
        if not reports:
            print("❌ No locale files found")
        for loc, rep in reports.items():
            if rep.errors:
                print(f"❌ Locale {loc}: validation FAILED")
                for e in rep.errors:
                    print(f"ERROR: {e.message} ({e.location or ''})")
            else:
                print(f"✅ Locale {loc}: OK (no errors)")
            for w in rep.warnings:
                print(f"WARN: {w.message} ({w.location or ''})")

    return 0 if reports and all(r.ok for r in reports.values()) else 2


def _add_numbers(p: argparse.ArgumentParser, required: bool = True) -> None:
    p.add_argument("--initial", type=float, required=required)
    p.add_argument("--monthly", type=float, required=required)
    p.add_argument("--rate", type=float, required=required, help="Annual return in percent (7 == 7%%)")
    p.add_argument("--years", type=int, required=required)
    p.add_argument("--goal", default=None)


def main() -> None:
    p = argparse.ArgumentParser(prog="scenario-content", description="Scenario slugs and narrative content")
    p.add_argument("--log_level", default=None)
    sub = p.add_subparsers(dest="cmd", required=True)

    e = sub.add_parser("encode", help="Build a scenario slug")
    _add_numbers(e)
    e.add_argument("--json", action="store_true")
    e.set_defaults(func=cmd_encode)

    d = sub.add_parser("decode", help="Parse a scenario slug")
    d.add_argument("slug")
    d.set_defaults(func=cmd_decode)

    g = sub.add_parser("generate", help="Generate the narrative sections")
    _add_numbers(g, required=False)
    g.add_argument("--slug", default=None)
    g.add_argument("--locale", default=SETTINGS.default_locale)
    g.add_argument("--json", action="store_true")
    g.set_defaults(func=cmd_generate)

    v = sub.add_parser("validate", help="Validate locale resource files")
    v.add_argument("--locales_dir", default=None)
    v.add_argument("--json", action="store_true")
    v.set_defaults(func=cmd_validate)

    args = p.parse_args()
    setup_logging(args.log_level or SETTINGS.log_level)
    if args.cmd == "generate" and not args.slug and None in (args.initial, args.monthly, args.rate, args.years):
        p.error("generate needs --slug or all of --initial/--monthly/--rate/--years")
    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
