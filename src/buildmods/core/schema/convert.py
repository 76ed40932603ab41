# src/buildmods/core/schema/convert.py
"""Conversão de valores da linguagem de configuração em listas de strings."""

from __future__ import annotations

from typing import Any, Tuple

from buildmods.core.exceptions import ArgumentTypeError


def to_strings(value: Any, *, what: str) -> Tuple[str, ...]:
    """
    Converte `value` em tupla ordenada de strings.

    Aceita `list` ou `tuple`; qualquer outro valor, ou qualquer elemento
    que não seja `str`, levanta `ArgumentTypeError`. `what` identifica o
    argumento nas mensagens (ex.: "srcs", "attr.modules(types)").
    """
    if not isinstance(value, (list, tuple)):
        raise ArgumentTypeError(
            message=f"{what}: expected list, got {type(value).__name__}",
            details={"argument": what, "type": type(value).__name__},
        )

    items = []
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise ArgumentTypeError(
                message=f"{what}[{i}]: not a string ({type(item).__name__})",
                details={"argument": what, "index": i, "type": type(item).__name__},
            )
        items.append(item)
    return tuple(items)
