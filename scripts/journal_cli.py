#!/usr/bin/env python3
"""
journal_cli.py — command-line mirror of the trade journal dashboard.

Sub-commands
------------
  summary   Totals, win rate, pips by session, wins by strategy.
  list      Recent trades, newest first.
  export    Write every trade as CSV (stdout or --output).
  clear     Delete every trade (requires --yes).

Quick examples
--------------
  python scripts/journal_cli.py summary
  python scripts/journal_cli.py summary --json
  python scripts/journal_cli.py list --limit 20
  python scripts/journal_cli.py export --output trades.csv
  python scripts/journal_cli.py clear --yes
"""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

# ── add repo root to path so local imports work when run from any cwd ──────────
_REPO = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_REPO))

from core.analytics import compute_journal_analytics
from core.trade_log_store import TradeLogStore
from database.local_store import LocalStore
from journal_config import load_journal_environment
from logging_config import get_cli_logger

LOGGER = get_cli_logger()


def _open_store(args: argparse.Namespace) -> TradeLogStore:
    cfg = load_journal_environment()
    store = TradeLogStore(
        LocalStore(db_path=args.db or cfg.db_path),
        storage_key=cfg.storage_key,
    )
    asyncio.run(store.load())
    LOGGER.debug("Loaded %d trades from %s", len(store), args.db or cfg.db_path)
    return store


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_summary(args: argparse.Namespace) -> None:
    store = _open_store(args)
    a = compute_journal_analytics(store.trade_logs)
    if args.as_json:
        print(json.dumps(
            {
                "total_trades": a.total_trades,
                "win_rate": round(a.win_rate, 2),
                "total_pips": a.total_pips,
                "risk_free_trades": a.risk_free_trades,
                "pips_by_session": {s.value: p for s, p in a.pips_by_session.items()},
                "wins_by_strategy": a.wins_by_strategy,
            },
            indent=2,
        ))
        return

    print(f"Total trades     : {a.total_trades}")
    print(f"Win rate         : {a.win_rate:.1f}%")
    print(f"Total pips       : {a.total_pips:+.1f}")
    print(f"Risk-free trades : {a.risk_free_trades}")
    print("\nPips by session")
    for session, pips in a.pips_by_session.items():
        print(f"  {session.value:<10} {pips:+8.1f}")
    print("\nWins by strategy")
    if not a.wins_by_strategy:
        print("  (none)")
    for name, count in a.wins_by_strategy.items():
        print(f"  {name:<20} {count:>4}")


def cmd_list(args: argparse.Namespace) -> None:
    store = _open_store(args)
    trades = store.trade_logs[: args.limit]
    if args.as_json:
        print(json.dumps([t.to_document() for t in trades], indent=2))
        return
    if not trades:
        print("No trades logged.")
        return
    print(f"{'Entry':<17} {'Pair':<9} {'Dir':<6} {'Pips':>8}  {'Result':<5} Strategy")
    print("─" * 70)
    for t in trades:
        print(
            f"{t.entry_date_time:%Y-%m-%d %H:%M} {t.currency_pair:<9} {t.direction.value:<6} "
            f"{t.pips_captured:+8.1f}  {t.result.value:<5} {t.strategy}"
        )


def cmd_export(args: argparse.Namespace) -> None:
    store = _open_store(args)
    csv_data = store.export_csv()
    if args.output:
        Path(args.output).write_text(csv_data, encoding="utf-8")
        print(f"Wrote {len(store)} trades to {args.output}")
    else:
        sys.stdout.write(csv_data)


def cmd_clear(args: argparse.Namespace) -> None:
    if not args.yes:
        print("Refusing to delete all trades without --yes.", file=sys.stderr)
        sys.exit(2)
    store = _open_store(args)
    count = len(store)
    store.clear_all()
    print(f"Deleted {count} trades.")


_COMMANDS = {
    "summary": cmd_summary,
    "list": cmd_list,
    "export": cmd_export,
    "clear": cmd_clear,
}


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="journal_cli",
        description="CLI mirror of the FX trade journal dashboard.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    p.add_argument("--db", default=None, help="SQLite file (default: JOURNAL_DB_PATH)")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("summary", help="Journal statistics")
    s.add_argument("--json", dest="as_json", action="store_true")

    ls = sub.add_parser("list", help="Recent trades")
    ls.add_argument("--limit", type=int, default=10)
    ls.add_argument("--json", dest="as_json", action="store_true")

    ex = sub.add_parser("export", help="Export trades as CSV")
    ex.add_argument("--output", default=None, help="Write CSV to this file")

    c = sub.add_parser("clear", help="Delete every trade")
    c.add_argument("--yes", action="store_true", help="Confirm deletion")

    return p


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    fn = _COMMANDS.get(args.cmd)
    if fn is None:
        parser.print_help()
        sys.exit(1)
    fn(args)


if __name__ == "__main__":
    main()
