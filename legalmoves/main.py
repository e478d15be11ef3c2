"""FastAPI application: wiring of settings, logging, service, routes and error responses."""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from legalmoves.api.routes import router
from legalmoves.core.config import Settings
from legalmoves.core.exceptions import FenError, InvalidRequestError
from legalmoves.services.legal_moves_service import LegalMovesService

logger = logging.getLogger(__name__)


async def invalid_fen_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Every FEN rejection looks the same to the client, the reason only ends up in the logs."""
    return PlainTextResponse("Invalid FEN", status_code=400)


async def invalid_request_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.info("Rejected request %s: %s", request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=400)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig does nothing once the root logger has handlers (ex. when run by an outside server)
    logging.getLogger("legalmoves").setLevel(level.upper())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="legalmoves")
    app.state.service = LegalMovesService(settings)
    app.add_exception_handler(FenError, invalid_fen_handler)
    app.add_exception_handler(InvalidRequestError, invalid_request_handler)
    app.include_router(router)
    return app


app = create_app()


def run() -> None:
    settings = Settings()
    application = create_app(settings)
    logger.info("Starting server on %s:%s", settings.host, settings.port)
    uvicorn.run(
        application,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
