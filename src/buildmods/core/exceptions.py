"""
buildmods — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do buildmods.

Objetivo:
- Permitir que schema, handlers de rule, registry e evaluator levantem
  exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ErrorPayload (ver `errors.py`)
- Evitar ValueError/TypeError genéricos nas validações de declaração

Regras:
- Toda violação de schema aborta a avaliação inteira do arquivo
- Exceções carregam apenas dados estruturados (serializáveis) em `details`
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class BuildModsException(Exception):
    """Base class para exceções internas do buildmods.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Definição de schema / argumentos
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SchemaError(BuildModsException):
    """Chave inesperada em `rule()`/construtores de atributo, ou kind inválido."""


@dataclass(frozen=True)
class ArgumentTypeError(BuildModsException):
    """Valor não é lista, ou lista contém elemento que não é string."""


@dataclass(frozen=True)
class UnknownAttributeError(BuildModsException):
    """Keyword passada à rule não existe no schema da rule."""


@dataclass(frozen=True)
class MissingRequiredFieldError(BuildModsException):
    """Parâmetro `name` ausente ou vazio na declaração de módulo."""


# ---------------------------------------------------------------------------
# Consulta
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ModuleNotRegisteredError(BuildModsException):
    """Consulta por identidade (declaring_file, name) nunca registrada."""


# ---------------------------------------------------------------------------
# Avaliação
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConfigEvaluationError(BuildModsException):
    """Falha do programa de configuração (sintaxe, nome indefinido, `fail()`)."""
