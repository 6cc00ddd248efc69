from logging import getLogger

from fastapi import Request, status, FastAPI
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

logger = getLogger(__name__)


def translate_pydantic_error(error: dict) -> str:
    type_ = error.get("type", "")
    msg = error.get("msg", "")
    ctx = error.get("ctx", {})

    translations = {
        "missing": "Campo obrigatório ausente.",
        "string_type": "O valor fornecido deve ser uma string.",
        "string_too_short": f"O texto deve ter pelo menos {ctx.get('min_length', '')} caracteres.",
        "string_too_long": f"O texto deve ter no máximo {ctx.get('max_length', '')} caracteres.",
        "decimal_parsing": "O valor fornecido não é um número decimal válido.",
        "decimal_type": "O valor fornecido não é um número decimal válido.",
        "decimal_max_digits": f"O valor deve ter no máximo {ctx.get('max_digits', '')} dígitos.",
        "decimal_max_places": f"O valor deve ter no máximo {ctx.get('decimal_places', '')} casas decimais.",
        "float_parsing": "O valor fornecido não é um número decimal válido.",
        "greater_than": f"O valor deve ser maior que {ctx.get('gt', '')}.",
        "uuid_parsing": "O valor fornecido não é um UUID válido.",
        "value_error": f"Erro de valor: {msg}",
    }

    if type_ in translations:
        return translations[type_]

    if type_ in ("enum", "literal_error"):
        expected = ctx.get("expected", "")
        return f"O valor deve ser um dos seguintes: {expected}."

    if "Input should be" in msg:
        return msg.replace("Input should be", "O valor deve ser")

    if "Field required" in msg:
        return "Campo obrigatório."

    return msg


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    translated_errors = []

    for error in exc.errors():
        translated_error = error.copy()
        translated_error["msg"] = translate_pydantic_error(error)
        translated_error.pop("ctx", None)
        translated_errors.append(translated_error)

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content={"detail": translated_errors},
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError):
    logger.error(f"Violação de integridade em {request.url.path}: {str(exc.orig)}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "A operação viola uma restrição de integridade dos dados."},
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_exception_handler)
