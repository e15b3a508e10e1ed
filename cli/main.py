"""Dividend advisor CLI.

Provides commands for:
- run: ingest exports, decide sells, confirm them, then plan buys
- sells: sell decisions only
- buys: buy plan only (no sells applied)
- convert: turn .xls exports in the input folder into .csv
"""
from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, Optional

import yaml

from common.config_loader import DEFAULT_CONFIG_PATH, LoadedConfig, load_all
from common.logging_config import setup_logging
from common.spreadsheet import convert_xls_files
from engine.advisor_engine import Advisor, BuyRecommendation
from engine.explanation_engine import explain_exclusions, explain_purchases, explain_sells
from engine.sell_engine import SellDecision
from portfolio.ingest import IngestError
from reporting.summary import store_summary


def load_config(args) -> Optional[LoadedConfig]:
    try:
        cfg = load_all(args.config)
    except (OSError, yaml.YAMLError) as e:
        print(f"Error: cannot load config {args.config}: {e}")
        return None
    setup_logging(str(cfg.policy.get("logging", {}).get("level", "INFO")))
    return cfg


def load_advisor(cfg: LoadedConfig) -> Optional[Advisor]:
    try:
        return Advisor.load(cfg)
    except IngestError as e:
        print(f"Error: {e}")
        return None


def print_summary(title: str, summary: Dict[str, Any]) -> None:
    print(f"\n{title}:")
    for k, v in summary.items():
        if isinstance(v, float):
            print(f"  {k}: ${v:,.2f}")
        elif isinstance(v, list):
            print(f"  {k}: {', '.join(v) if v else '-'}")
        else:
            print(f"  {k}: {v}")


def print_warnings(advisor: Advisor) -> None:
    if advisor.warnings:
        print("\nWarnings:")
        for w in advisor.warnings:
            print(f"  - {w}")


def print_sells(decision: SellDecision, explain: bool) -> None:
    if not decision.candidates:
        print("\nNo holdings to sell.")
        return
    print("\nSell:")
    lines = explain_sells(decision.summaries) if explain else [s.symbol for s in decision.summaries]
    for line in lines:
        print("  " + line)


def print_buys(rec: BuyRecommendation, explain: bool) -> None:
    if explain and rec.screen.exclusions:
        print("\nExcluded:")
        for line in explain_exclusions(rec.screen.exclusions):
            print("  " + line)

    if rec.plan.purchases:
        print("\nBuy:")
        lines = explain_purchases(rec.plan.purchases) if explain else [str(p) for p in rec.plan.purchases]
        for line in lines:
            print("  " + line)
    else:
        print("\nNo purchases fit the budget.")

    print_summary("Allocation", rec.summary)


def confirm_sold(args) -> bool:
    if args.yes:
        return True
    if args.no_sell:
        return False
    response = input("Did You Sell The Items? [Y/N] ")
    return response.strip().upper() in ("Y", "YES")


def cmd_run(args) -> int:
    """Handle run command: full sell-then-buy cycle."""
    cfg = load_config(args)
    if cfg is None:
        return 1
    advisor = load_advisor(cfg)
    if advisor is None:
        return 1

    print(f"Dividend Advisor ({advisor.today.isoformat()})")
    print("=" * 50)
    print_summary("Holdings", store_summary(advisor.store))
    print_warnings(advisor)

    decision = advisor.determine_sells()
    print_sells(decision, args.explain)

    if decision.candidates and confirm_sold(args):
        entries = advisor.sell()
        print(f"\nRecorded {len(decision.candidates)} sales ({len(entries)} at a loss).")

    rec = advisor.determine_buys(args.budget)
    print_buys(rec, args.explain)
    return 0


def cmd_sells(args) -> int:
    """Handle sells command: report sell candidates only."""
    cfg = load_config(args)
    if cfg is None:
        return 1
    advisor = load_advisor(cfg)
    if advisor is None:
        return 1
    print_warnings(advisor)
    print_sells(advisor.determine_sells(), args.explain)
    return 0


def cmd_buys(args) -> int:
    """Handle buys command: plan purchases without applying any sells."""
    cfg = load_config(args)
    if cfg is None:
        return 1
    advisor = load_advisor(cfg)
    if advisor is None:
        return 1
    print_warnings(advisor)
    print_buys(advisor.determine_buys(args.budget), args.explain)
    return 0


def cmd_convert(args) -> int:
    """Handle convert command: spreadsheet exports to tabular text."""
    cfg = load_config(args)
    if cfg is None:
        return 1
    cfg.paths.ensure()
    converted = convert_xls_files(cfg.paths.input_dir)
    if not converted:
        print("No .xls files to convert.")
    for p in converted:
        print(f"  {p.name}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="cli.main",
        description="Dividend advisor: sell and buy decisions from brokerage exports",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Policy config file")
    common.add_argument("--explain", action="store_true", help="Include explanations for each decision")

    run_p = sub.add_parser("run", parents=[common], help="Sell decisions, confirmation, then buy plan")
    run_p.add_argument("--budget", type=float, default=None, help="Override the amount available to invest")
    confirm = run_p.add_mutually_exclusive_group()
    confirm.add_argument("--yes", action="store_true", help="Treat the sell list as already sold")
    confirm.add_argument("--no-sell", action="store_true", help="Skip the confirmation and apply no sells")
    run_p.set_defaults(func=cmd_run)

    sells_p = sub.add_parser("sells", parents=[common], help="Sell decisions only")
    sells_p.set_defaults(func=cmd_sells)

    buys_p = sub.add_parser("buys", parents=[common], help="Buy plan only")
    buys_p.add_argument("--budget", type=float, default=None, help="Override the amount available to invest")
    buys_p.set_defaults(func=cmd_buys)

    conv_p = sub.add_parser("convert", parents=[common], help="Convert .xls exports to .csv")
    conv_p.set_defaults(func=cmd_convert)
    return p


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)
    raise SystemExit(args.func(args))


if __name__ == "__main__":
    main(sys.argv[1:])
