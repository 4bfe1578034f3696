from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from pathlib import Path

from betadvisor.core.config import settings
from betadvisor.core.logger import get_logger
from betadvisor.core.timeutils import epoch_seconds, utcnow
from betadvisor.services.match_report import build_report
from betadvisor.services.matches import get_matches

logger = get_logger("jobs.fetch_matches")


def _report_path(output_dir: Path) -> Path:
    stamp = utcnow().strftime("%Y-%m-%d_%H-%M-%S")
    return output_dir / f"matches_{stamp}.md"


async def run(
    *,
    time_window_seconds: int | None = None,
    sport_name: str | None = None,
    min_odds: Decimal | None = None,
    output_dir: str | Path | None = None,
) -> Path | None:
    """Fetch upcoming games and save them as a Markdown report; None when nothing matched."""
    window = int(time_window_seconds or settings.match_time_window_seconds)
    sport = sport_name if sport_name is not None else settings.sport_name
    threshold = min_odds if min_odds is not None else settings.min_odds_dec

    now = utcnow()
    start = epoch_seconds(now)
    end = epoch_seconds(now + timedelta(seconds=window))
    logger.info(
        "fetch_matches_start chain=%s window_s=%s sport=%s min_odds=%s",
        settings.chain,
        window,
        sport or "*",
        threshold,
    )

    matches = await get_matches(start, end, sport_name=sport or None, min_odds=threshold)
    if not matches:
        logger.info("fetch_matches_empty sport=%s", sport or "*")
        return None
    logger.info("fetch_matches_ok games=%s", len(matches))

    out_dir = Path(output_dir or settings.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = _report_path(out_dir)
    report = build_report(
        matches,
        chain=settings.chain,
        graph_url=settings.graph_url,
        tz_offset_hours=int(settings.match_report_tz_offset_hours),
    )
    path.write_text(report, encoding="utf-8")
    logger.info("fetch_matches_saved path=%s", path)
    return path
