# src/buildmods/core/schema/attrs.py
"""
Vocabulário de kinds de atributo de uma rule.

Este módulo define os kinds que um schema de rule pode declarar e o
valor predeclarado `attr`, exposto aos autores de configuração:

    attr.files()                     → FilesKind
    attr.modules(types=["lib", ...]) → ModulesKind

O conjunto de kinds é fechado (`AttributeKind`): qualquer outro valor
usado como atributo de schema é rejeitado por `rule()`.

Invariantes:
    - Kinds são imutáveis após criados
    - Construtores não têm efeitos colaterais
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, Union

from buildmods.core.exceptions import SchemaError

from .convert import to_strings


@dataclass(frozen=True)
class FilesKind:
    """Atributo cujo valor é uma lista de caminhos de arquivo."""

    def __str__(self) -> str:
        return "files"


@dataclass(frozen=True)
class ModulesKind:
    """Atributo cujo valor é uma lista de referências a outros módulos.

    `allowed_types` vazio significa "sem filtro"; mesmo quando preenchido,
    o filtro é apenas registrado, nunca aplicado.
    """

    allowed_types: Tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"modules: types={list(self.allowed_types)}"


AttributeKind = Union[FilesKind, ModulesKind]

_UNSET = object()

ATTRIBUTE_KINDS = (FilesKind, ModulesKind)


def _reject_positional(func: str, args: Tuple[Any, ...]) -> None:
    if args:
        raise SchemaError(
            message=f"{func}: positional argument is not supported",
            details={"function": func, "positional_count": len(args)},
        )


class Attr:
    """Valor predeclarado `attr` da linguagem de configuração."""

    def files(self, *args: Any, **kwargs: Any) -> FilesKind:
        _reject_positional("attr.files", args)
        if kwargs:
            key = next(iter(kwargs))
            raise SchemaError(
                message=f"attr.files: unexpected key: {key}",
                details={"function": "attr.files", "key": key},
                hint="attr.files() não aceita argumentos.",
            )
        return FilesKind()

    def modules(self, *args: Any, types: Any = _UNSET, **kwargs: Any) -> ModulesKind:
        _reject_positional("attr.modules", args)
        if kwargs:
            key = next(iter(kwargs))
            raise SchemaError(
                message=f"attr.modules: unexpected key: {key}",
                details={"function": "attr.modules", "key": key},
                hint="attr.modules() aceita apenas `types`.",
            )
        if types is _UNSET:
            return ModulesKind()
        return ModulesKind(allowed_types=to_strings(types, what="attr.modules(types)"))

    def __repr__(self) -> str:
        return "attr"
