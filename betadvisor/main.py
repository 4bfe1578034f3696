from contextlib import asynccontextmanager
from datetime import timedelta
from decimal import Decimal
from typing import Any, Optional
import logging

import httpx
from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from betadvisor.core.config import settings
from betadvisor.core.http import close_http_clients, init_http_clients
from betadvisor.core.timeutils import epoch_seconds, utcnow
from betadvisor.data.providers.subgraph import SubgraphError
from betadvisor.services.button_mapper import get_button_text
from betadvisor.services.matches import get_matches
from betadvisor.services.recommendation import process_recommendation

logger = logging.getLogger(__name__)


class RecommendationIn(BaseModel):
    game_id: str = Field(..., alias="gameId", min_length=1)
    condition_id: str = Field(..., alias="conditionId", min_length=1)
    outcome_id: str = Field(..., alias="outcomeId", min_length=1)


@asynccontextmanager
async def lifespan(_: FastAPI):
    await init_http_clients()
    try:
        yield
    finally:
        try:
            await close_http_clients()
        except Exception:
            logger.exception("http_client_close_failed")


app = FastAPI(title="Bet Advisor", lifespan=lifespan)


@app.get("/health")
async def health():
    return {"ok": True}


@app.get("/api/v1/matches")
async def api_matches(
    window_seconds: Optional[int] = Query(None, ge=1),
    sport_name: Optional[str] = None,
    min_odds: Optional[Decimal] = Query(None, ge=0),
):
    window = int(window_seconds or settings.match_time_window_seconds)
    now = utcnow()
    start = epoch_seconds(now)
    end = epoch_seconds(now + timedelta(seconds=window))
    try:
        matches = await get_matches(start, end, sport_name=sport_name, min_odds=min_odds)
    except (SubgraphError, httpx.HTTPError) as exc:
        logger.error("api_matches_upstream_failed err=%s", exc)
        raise HTTPException(status_code=502, detail=f"Upstream error: {exc}")
    return {"count": len(matches), "from": start, "to": end, "matches": [m.to_dict() for m in matches]}


@app.post("/api/v1/recommendations/button")
async def api_recommendation_button(rec: RecommendationIn):
    result = await get_button_text(rec.game_id, rec.condition_id, rec.outcome_id)
    return result.to_dict()


@app.post("/api/v1/recommendations/format", response_class=PlainTextResponse)
async def api_recommendation_format(payload: Any = Body(None)):
    return await process_recommendation(payload)
