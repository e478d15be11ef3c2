"""HTTP routes: percent-decoding of the FEN path segment and rendering of the moves as JSON."""

from pathlib import Path
from urllib.parse import unquote

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from legalmoves.api.models import MoveResponse
from legalmoves.core.exceptions import InvalidRequestError
from legalmoves.services.legal_moves_service import LegalMovesService

STANDARD_PREFIX = "/standard/"
USAGE = (Path(__file__).parent / "usage.md").read_text(encoding="utf-8")

router = APIRouter()


def get_service(request: Request) -> LegalMovesService:
    return request.app.state.service


def decode_fen_segment(raw_segment: str) -> str:
    """
    Percent-decode the raw path segment. '+' is read as a space, so both
    `...%20w%20KQkq...` and `...+w+KQkq...` work.
    """
    # the slashes of the piece placement must be encoded, otherwise the FEN spans several path segments
    if "/" in raw_segment:
        raise HTTPException(status_code=404, detail="Not Found")
    try:
        decoded = unquote(raw_segment, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as exc:
        raise InvalidRequestError("Failed to decode URL") from exc
    return decoded.replace("+", " ")


def _raw_segment(request: Request) -> str:
    """The path as it was sent: the router only gets to see the already decoded one."""
    raw_path: bytes = request.scope.get("raw_path") or request.url.path.encode()
    path = raw_path.decode("latin-1")
    return path[path.index(STANDARD_PREFIX) + len(STANDARD_PREFIX) :]


@router.get("/standard/{fen:path}")
def standard(
    fen: str, request: Request, service: LegalMovesService = Depends(get_service)
) -> JSONResponse:
    """All legal moves of the position, as a JSON array. An empty array means there are none (checkmate or stalemate)."""
    decoded_fen = decode_fen_segment(_raw_segment(request))
    include_type = service.settings.include_move_type
    moves = [
        MoveResponse.from_record(record).to_json(include_type=include_type)
        for record in service.legal_moves(decoded_fen)
    ]
    return JSONResponse(content=moves)


@router.get("/", response_class=PlainTextResponse)
def readme() -> str:
    return USAGE
