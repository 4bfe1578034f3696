import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from dotenv import load_dotenv

load_dotenv()

MODES = ("market", "selection")


def lookup(mode: str, outcome_id: str, resolver=None) -> str:
    """Market or selection name of one outcome id."""
    from betadvisor.services.name_resolver import build_outcome_resolver

    resolver = resolver or build_outcome_resolver()
    if mode == "market":
        return resolver.market_name(outcome_id)
    if mode == "selection":
        return resolver.selection_name(outcome_id)
    raise ValueError(f'Invalid mode "{mode}". Use "market" or "selection".')


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Resolve an Azuro outcome id to its market or selection name")
    parser.add_argument("--mode", required=True, choices=MODES, help="market: bet type; selection: outcome label")
    parser.add_argument("--id", dest="outcome_id", required=True, type=int, help="Outcome id, e.g. 29")
    args = parser.parse_args(argv)
    print(lookup(args.mode, str(args.outcome_id)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
