"""
buildmods — Canonical Error Structures (v1)

Este módulo define o payload canônico de erro reportado pela camada de
entrada (CLI) do buildmods. Erros de avaliação e de consulta são
convertidos em payloads:

- explícitos
- serializáveis
- acionáveis

Nenhum stack trace é exposto no payload.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from buildmods.core.config.errors import ConfigError
from buildmods.core.exceptions import BuildModsException


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do buildmods.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao autor da configuração
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)

    def format(self) -> str:
        text = f"error: [{self.type}] {self.message}"
        if self.hint:
            text += f"\nhint: {self.hint}"
        return text


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Schema / declaração
SCHEMA_ERROR = "SchemaError"
ARGUMENT_TYPE_ERROR = "ArgumentTypeError"
UNKNOWN_ATTRIBUTE = "UnknownAttributeError"
MISSING_REQUIRED_FIELD = "MissingRequiredFieldError"

# Consulta
MODULE_NOT_REGISTERED = "ModuleNotRegisteredError"

# Avaliação / configuração
CONFIG_EVALUATION_ERROR = "ConfigEvaluationError"
CONFIG_ERROR = "ConfigError"
EVALUATION_ERROR = "EVALUATION_ERROR"


def exception_to_payload(exc: BaseException) -> ErrorPayload:
    """Converte exceções em ErrorPayload (serializável, acionável).

    Regras:
    - BuildModsException: já vem com message/details/hint; o nome da classe
      é o código estável.
    - ConfigError: erro da camada de configuração do host.
    - Outras exceções: encapsular como EVALUATION_ERROR sem expor stack trace.
    """
    if isinstance(exc, BuildModsException):
        return ErrorPayload(
            type=exc.__class__.__name__,
            message=exc.message or "Erro de avaliação",
            details=dict(exc.details or {}),
            hint=exc.hint,
        )

    if isinstance(exc, ConfigError):
        return ErrorPayload(
            type=CONFIG_ERROR,
            message=str(exc) or "Configuração inválida",
            details={"exception_class": exc.__class__.__name__},
            hint="Verifique os arquivos de configuração do buildmods",
        )

    return ErrorPayload(
        type=EVALUATION_ERROR,
        message=str(exc) or "Erro inesperado durante avaliação",
        details={"exception_class": exc.__class__.__name__},
        hint=None,
    )
