import logging
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from config import CORS_ORIGINS, PORT, HOST, DEBUG
from database import get_db, init_db
from models import (
    GameResponse, GamePlayersResponse, Player,
    DrawOptions, DrawRequest, PoolDrawRequest, DrawResponse,
    MvpVote, MvpPodiumResponse
)
from constants import (
    ATTRIBUTE_NAMES, ATTRIBUTE_MIN, ATTRIBUTE_MAX,
    DRAW_MODES, DEFAULT_DRAW_MODE, TEAM_FORMATS, DEFAULT_TEAM_FORMAT, VISITORS_MAX
)
from mvp import build_podium
from team_draw import build_draw_pool, draw_teams

logger = logging.getLogger(__name__)

NO_PLAYERS_MESSAGE = "No players to draw. Confirm players, add them by hand or add visitors."

app = FastAPI(
    title="Volleyball Club API",
    version="1.0.0",
    docs_url="/api/docs" if DEBUG else None,
    redoc_url="/api/redoc" if DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": True, "status_code": exc.status_code, "message": exc.detail, "path": str(request.url.path)}
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": True, "status_code": 500, "message": "Internal server error", "path": str(request.url.path)}
    )


@app.on_event("startup")
def startup():
    init_db()


def fetch_game(cursor, game_id: str) -> dict:
    cursor.execute("SELECT * FROM games WHERE id = %s", (game_id,))
    row = cursor.fetchone()
    if not row:
        raise HTTPException(status_code=404, detail="Game not found")
    return dict(row)


def fetch_confirmed_players(cursor, game_id: str) -> list[Player]:
    cursor.execute("""
        SELECT p.*
        FROM confirmations c
        JOIN players p ON p.user_id = c.user_id
        WHERE c.game_id = %s
        ORDER BY c.confirmed_at, c.id
    """, (game_id,))
    return [Player.from_row(dict(row)) for row in cursor.fetchall()]


def fetch_unconfirmed_players(cursor, game_id: str) -> list[Player]:
    cursor.execute("""
        SELECT p.*
        FROM players p
        WHERE NOT EXISTS (
            SELECT 1 FROM confirmations c
            WHERE c.game_id = %s AND c.user_id = p.user_id
        )
        ORDER BY p.username
    """, (game_id,))
    return [Player.from_row(dict(row)) for row in cursor.fetchall()]


def fetch_players_by_id(cursor, player_ids: list[str]) -> list[Player]:
    """Players for ``player_ids``, in the requested order."""
    if not player_ids:
        return []
    cursor.execute("SELECT * FROM players WHERE id = ANY(%s)", (list(player_ids),))
    by_id = {str(row["id"]): Player.from_row(dict(row)) for row in cursor.fetchall()}

    missing = [player_id for player_id in player_ids if player_id not in by_id]
    if missing:
        raise HTTPException(status_code=404, detail=f"Player not found: {', '.join(missing)}")
    return [by_id[player_id] for player_id in player_ids]


def run_draw(players: list[Player], request: DrawOptions, game_id=None) -> DrawResponse:
    """Draw ``players`` with the request's configuration."""
    response = dict(
        game_id=game_id,
        mode=request.mode,
        number_of_teams=request.number_of_teams,
        max_players_per_team=request.max_players_per_team,
        seed=request.seed,
        pool_size=len(players),
    )
    if not players:
        return DrawResponse(**response, empty=True, message=NO_PLAYERS_MESSAGE, teams=[])

    try:
        teams = draw_teams(
            players,
            number_of_teams=request.number_of_teams,
            max_players_per_team=request.max_players_per_team,
            mode=request.mode,
            seed=request.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return DrawResponse(**response, teams=teams)


# ============ GAMES ============

@app.get("/api/games/latest", response_model=GameResponse)
def get_latest_game():
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM games ORDER BY created_at DESC LIMIT 1")
        row = cursor.fetchone()
        if not row:
            raise HTTPException(status_code=404, detail="No games scheduled")
        return GameResponse(**dict(row))


@app.get("/api/games/{game_id}", response_model=GameResponse)
def get_game(game_id: str):
    with get_db() as conn:
        cursor = conn.cursor()
        return GameResponse(**fetch_game(cursor, game_id))


@app.get("/api/games/{game_id}/players", response_model=GamePlayersResponse)
def get_game_players(game_id: str):
    """Players who confirmed for the game, and everyone else the admin can add."""
    with get_db() as conn:
        cursor = conn.cursor()
        game = fetch_game(cursor, game_id)
        confirmed = fetch_confirmed_players(cursor, game_id)
        unconfirmed = fetch_unconfirmed_players(cursor, game_id)
    return GamePlayersResponse(game=GameResponse(**game), confirmed=confirmed, unconfirmed=unconfirmed)


# ============ TEAM DRAW ============

@app.post("/api/games/{game_id}/draw", response_model=DrawResponse)
def draw_game_teams(game_id: str, request: DrawRequest):
    with get_db() as conn:
        cursor = conn.cursor()
        fetch_game(cursor, game_id)
        confirmed = fetch_confirmed_players(cursor, game_id)
        extra_players = fetch_players_by_id(cursor, request.extra_player_ids)

    pool = build_draw_pool(
        confirmed,
        extra_players=extra_players,
        absent_ids=request.absent_player_ids,
        visitors=request.visitors,
    )
    logger.info("Drawing teams for game %s from %d players", game_id, len(pool))
    return run_draw(pool, request, game_id=game_id)


@app.post("/api/draw", response_model=DrawResponse)
def draw_pool_teams(request: PoolDrawRequest):
    """Draw an explicit list of players without reading any game."""
    pool = build_draw_pool(
        request.players,
        absent_ids=request.absent_player_ids,
        visitors=request.visitors,
    )
    return run_draw(pool, request)


# ============ MVP ============

@app.get("/api/games/{game_id}/mvp-podium", response_model=MvpPodiumResponse)
def get_mvp_podium(game_id: str):
    with get_db() as conn:
        cursor = conn.cursor()
        fetch_game(cursor, game_id)
        cursor.execute("""
            SELECT game_id, voter_id, player_id, username, rank
            FROM mvp_votes
            WHERE game_id = %s
            ORDER BY created_at, id
        """, (game_id,))
        votes = [MvpVote(**dict(row)) for row in cursor.fetchall()]

    return MvpPodiumResponse(game_id=game_id, total_votes=len(votes), podium=build_podium(votes))


# ============ CONFIGURATION ============

@app.get("/api/config")
def get_config():
    return {
        "team_formats": TEAM_FORMATS,
        "default_team_format": DEFAULT_TEAM_FORMAT,
        "draw_modes": DRAW_MODES,
        "default_draw_mode": DEFAULT_DRAW_MODE,
        "visitors": {"min": 0, "max": VISITORS_MAX},
        "attributes": {"names": ATTRIBUTE_NAMES, "min": ATTRIBUTE_MIN, "max": ATTRIBUTE_MAX},
    }


# ============ HEALTH CHECK ============

@app.get("/api/health")
def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT, reload=DEBUG)
