import argparse
import asyncio
import json
import os
import sys
from decimal import Decimal, InvalidOperation

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from dotenv import load_dotenv

load_dotenv()


def load_env_file(path: str):
    if not path:
        return
    if path.lower().endswith(".json"):
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        for k, v in data.items():
            os.environ[str(k)] = str(v)
    else:
        load_dotenv(path, override=True)


def _decimal_arg(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")


async def fetch_and_save(window: int | None, sport: str | None, min_odds: Decimal | None) -> int:
    from betadvisor.core.http import close_http_clients, init_http_clients
    from betadvisor.jobs import fetch_matches

    await init_http_clients()
    try:
        path = await fetch_matches.run(time_window_seconds=window, sport_name=sport, min_odds=min_odds)
    finally:
        await close_http_clients()
    if path is None:
        print("No upcoming games found.")
        return 0
    print(f"Matches data saved to: {path}")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Fetch upcoming Azuro games and save them as a Markdown report")
    parser.add_argument("--t", dest="window", type=int, default=None, help="Match time window in seconds (default 86400)")
    parser.add_argument("--sport", default=None, help="Sport name filter (default SPORT_NAME)")
    parser.add_argument("--min-odds", type=_decimal_arg, default=None, help="Minimum odds (default MIN_ODDS)")
    parser.add_argument("--config", help="Path to env-like file or JSON with overrides", default=None)
    args = parser.parse_args()
    if args.config:
        load_env_file(args.config)
    try:
        code = asyncio.run(fetch_and_save(args.window, args.sport, args.min_odds))
    except Exception as exc:
        print(f"Error fetching matches: {exc}", file=sys.stderr)
        raise SystemExit(1)
    raise SystemExit(code)


if __name__ == "__main__":
    main()
