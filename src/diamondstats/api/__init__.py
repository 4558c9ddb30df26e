"""REST API and minimal HTML pages for browsing and editing player statistics."""

from __future__ import annotations

import logging
from html import escape
from typing import Any, Iterable, Optional

import urllib.parse

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse

from diamondstats.api.schemas import (
    DescriptionResponse,
    PlayerDetailResponse,
    PlayerEditResponse,
    PlayerListResponse,
    PlayerUpdateRequest,
)
from diamondstats.config import SORTABLE_FIELDS, Settings, load_settings
from diamondstats.describe import generate_description
from diamondstats.errors import (
    NotFoundError,
    PlayerNameConflictError,
)
from diamondstats.listing import SortSpec, list_players
from diamondstats.models import PlayerSummary
from diamondstats.persistence import StatsStore
from diamondstats.service import get_player_detail, update_player


logger = logging.getLogger("uvicorn.error")

LISTING_COLUMNS: list[tuple[str, str]] = [
    ("name", "Player"),
    ("position", "Pos"),
    ("games", "G"),
    ("at_bat", "AB"),
    ("runs", "R"),
    ("hits", "H"),
    ("home_runs", "HR"),
    ("rbi", "RBI"),
    ("batting_average", "AVG"),
    ("on_base_plus_slugging", "OPS"),
    ("hits_per_game", "H/G"),
]

DETAIL_ROWS: list[tuple[str, str]] = [
    ("games", "Games"),
    ("at_bat", "At-bats"),
    ("runs", "Runs"),
    ("hits", "Hits"),
    ("doubles", "Doubles"),
    ("triples", "Triples"),
    ("home_runs", "Home runs"),
    ("rbi", "Runs batted in"),
    ("walks", "Walks"),
    ("strikeouts", "Strikeouts"),
    ("stolen_bases", "Stolen bases"),
    ("caught_stealing", "Caught stealing"),
    ("batting_average", "Batting average"),
    ("on_base_percentage", "On-base percentage"),
    ("slugging_percentage", "Slugging percentage"),
    ("on_base_plus_slugging", "On-base plus slugging"),
]

_RATE_COLUMNS = {
    "batting_average",
    "on_base_percentage",
    "slugging_percentage",
    "on_base_plus_slugging",
    "hits_per_game",
}

_PAGE_STYLE = """
body { font-family: system-ui, sans-serif; margin: 2rem; color: #1f2933; }
table { border-collapse: collapse; }
th, td { padding: 0.35rem 0.7rem; border-bottom: 1px solid #d9e2ec; text-align: right; }
th:first-child, td:first-child { text-align: left; }
th a { color: inherit; text-decoration: none; }
th.active { background: #f0f4f8; }
.description { max-width: 48rem; line-height: 1.5; white-space: pre-line; }
.muted { color: #829ab1; }
"""


def _format_cell(field: str, value: Any) -> str:
    if value is None:
        return "-"
    if field in _RATE_COLUMNS:
        return f"{float(value):.3f}"
    return escape(str(value))


def _page(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html><html><head><meta charset='utf-8'>"
        f"<title>{escape(title)}</title><style>{_PAGE_STYLE}</style></head>"
        f"<body>{body}</body></html>"
    )


def _sort_link(field: str, label: str, spec: SortSpec) -> str:
    if field not in SORTABLE_FIELDS:
        return f"<th>{escape(label)}</th>"
    if field == spec.field:
        next_direction = "asc" if spec.direction == "desc" else "desc"
        arrow = " ▼" if spec.direction == "desc" else " ▲"
        css = " class='active'"
    else:
        next_direction = "desc"
        arrow = ""
        css = ""
    query = urllib.parse.urlencode({"sort": field, "direction": next_direction})
    return f"<th{css}><a href='/ui/players?{query}'>{escape(label)}{arrow}</a></th>"


def _render_listing_page(players: Iterable[PlayerSummary], spec: SortSpec) -> str:
    header = "".join(_sort_link(field, label, spec) for field, label in LISTING_COLUMNS)
    rows: list[str] = []
    for player in players:
        cells: list[str] = []
        for field, _ in LISTING_COLUMNS:
            if field == "name":
                cells.append(
                    f"<td><a href='/ui/players/{player.id}'>{escape(player.name)}</a></td>"
                )
            else:
                cells.append(f"<td>{_format_cell(field, getattr(player, field))}</td>")
        rows.append(f"<tr>{''.join(cells)}</tr>")
    if not rows:
        rows.append(
            f"<tr><td colspan='{len(LISTING_COLUMNS)}' class='muted'>"
            "No players imported yet. Run <code>diamondstats import</code>.</td></tr>"
        )
    body = (
        "<h1>Players</h1>"
        f"<table><thead><tr>{header}</tr></thead><tbody>{''.join(rows)}</tbody></table>"
    )
    return _page("Players", body)


def _render_detail_page(player: PlayerSummary) -> str:
    position = player.position_name or player.position or "Unknown position"
    rows = "".join(
        f"<tr><th>{escape(label)}</th><td>{_format_cell(field, getattr(player, field))}</td></tr>"
        for field, label in DETAIL_ROWS
    )
    if player.description:
        description = f"<p class='description'>{escape(player.description)}</p>"
    else:
        description = "<p class='muted'>No description generated yet.</p>"
    body = (
        "<p><a href='/ui/players'>&larr; All players</a></p>"
        f"<h1>{escape(player.name)}</h1>"
        f"<p class='muted'>{escape(position)}</p>"
        f"{description}"
        f"<table>{rows}</table>"
    )
    return _page(player.name, body)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="diamondstats")
    store = StatsStore(settings.db_path)
    app.state.settings = settings
    app.state.stats_store = store

    def _detail_or_404(player_id: int) -> PlayerSummary:
        try:
            return get_player_detail(store, player_id)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/players", response_model=PlayerListResponse)
    async def index(
        sort: Optional[str] = Query(None),
        direction: Optional[str] = Query(None),
    ) -> PlayerListResponse:
        spec, players = list_players(store, sort, direction, default=settings.default_sort)
        return PlayerListResponse(
            players=[PlayerDetailResponse.from_summary(player) for player in players],
            sort=spec.field,
            direction=spec.direction,
        )

    @app.get("/players/{player_id}", response_model=PlayerDetailResponse)
    async def show(player_id: int) -> PlayerDetailResponse:
        return PlayerDetailResponse.from_summary(_detail_or_404(player_id))

    @app.get("/players/{player_id}/edit", response_model=PlayerEditResponse)
    async def edit(player_id: int) -> PlayerEditResponse:
        return PlayerEditResponse.from_summary(_detail_or_404(player_id))

    @app.put("/players/{player_id}", response_model=PlayerDetailResponse)
    async def update(player_id: int, payload: PlayerUpdateRequest) -> PlayerDetailResponse:
        try:
            summary = update_player(store, player_id, payload)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except PlayerNameConflictError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        logger.info("Updated player %s", player_id)
        return PlayerDetailResponse.from_summary(summary)

    @app.post("/players/{player_id}/generate-description", response_model=DescriptionResponse)
    async def describe(player_id: int) -> DescriptionResponse:
        try:
            description = generate_description(store, player_id)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return DescriptionResponse(description=description)

    @app.get("/ui/players", response_class=HTMLResponse)
    async def ui_index(
        sort: Optional[str] = Query(None),
        direction: Optional[str] = Query(None),
    ):
        spec, players = list_players(store, sort, direction, default=settings.default_sort)
        return HTMLResponse(_render_listing_page(players, spec))

    @app.get("/ui/players/{player_id}", response_class=HTMLResponse)
    async def ui_show(player_id: int):
        return HTMLResponse(_render_detail_page(_detail_or_404(player_id)))

    return app
