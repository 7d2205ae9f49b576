import logging
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BibliotecaError(Exception):
    """
    Erro de negócio que vira resposta JSON ``{"mensagem", "codigo"}``.

    O router levanta este erro a partir do envelope devolvido pelas actions;
    o ``status_code`` escolhido lá é devolvido ao cliente sem alteração.
    """

    def __init__(self, message: str, code: str = "ERROR", status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        return {"mensagem": self.message, "codigo": self.code}


async def biblioteca_exception_handler(request: Request, exc: BibliotecaError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Requisição inválida em {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={
            "mensagem": "Dados da requisição inválidos.",
            "codigo": "VALIDATION_ERROR",
            "erros": jsonable_encoder(exc.errors()),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Erro inesperado em {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "mensagem": "Ocorreu um erro inesperado. Entre em contato com o administrador do sistema.",
            "codigo": "INTERNAL_ERROR",
        },
    )
