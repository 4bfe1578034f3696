import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from dotenv import load_dotenv

load_dotenv()

GAME_ID = "0x3b182e9fbf50398a412d17d7969561e3bfcc4fa4_486903000486903001"

RECOMMENDATIONS = [
    ("Home win (1)", {"gameId": GAME_ID, "conditionId": "486903008559711340", "outcomeId": "29"}),
    ("Draw (X)", {"gameId": GAME_ID, "conditionId": "486903008559711340", "outcomeId": "30"}),
    ("Total over 2.5", {"gameId": GAME_ID, "conditionId": "1000000000000000000000000000000000000640393190", "outcomeId": "17"}),
    ("Double chance 1X", {"gameId": GAME_ID, "conditionId": "486903023486903024", "outcomeId": "6266"}),
    ("Home win & over 2.5", {"gameId": GAME_ID, "conditionId": "1000000000000000000000000000000000000640393192", "outcomeId": "9738"}),
    ("Malformed", "bet on the home team"),
]


async def run_demo():
    from betadvisor.core.http import close_http_clients, init_http_clients
    from betadvisor.services.recommendation import process_recommendation

    await init_http_clients()
    try:
        for idx, (label, rec) in enumerate(RECOMMENDATIONS, start=1):
            print(f"\n--- Case {idx}: {label} ---")
            print(await process_recommendation(rec))
    finally:
        await close_http_clients()


def main():
    asyncio.run(run_demo())


if __name__ == "__main__":
    main()
