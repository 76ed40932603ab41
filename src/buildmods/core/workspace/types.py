# src/buildmods/core/workspace/types.py
"""
Tipos canônicos do workspace do buildmods.

Este módulo define as estruturas imutáveis registradas no `Workspace`:

    - FileDependency   → lista ordenada de caminhos de um atributo `files`
    - ModuleDependency → lista ordenada de referências de um atributo
                         `modules`, com os tipos permitidos herdados do kind
    - Module           → módulo declarado, identificado por
                         (declaring_file, name)

Invariantes:
    - Instâncias nunca são alteradas após criadas (frozen)
    - `Module.name` é sempre não vazio (garantido pelo handler de rule)
    - A ordem dos mappings de dependência é a ordem de declaração
      do schema da rule

Limites explícitos:
    - Não validam argumentos da linguagem de configuração
    - Não resolvem dependências entre módulos
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Tuple


ModuleKey = Tuple[str, str]


@dataclass(frozen=True)
class FileDependency:
    """Caminhos declarados sob um atributo `files` de uma declaração."""

    items: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ModuleDependency:
    """
    Referências declaradas sob um atributo `modules` de uma declaração.

    `allowed_types` é registrado a partir do `ModulesKind` do schema, mas
    não é confrontado com o tipo da rule do módulo referenciado.
    """

    allowed_types: Tuple[str, ...] = ()
    items: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Module:
    """Registro de um módulo declarado."""

    declaring_file: str
    name: str
    file_deps: Mapping[str, FileDependency] = field(default_factory=dict)
    module_deps: Mapping[str, ModuleDependency] = field(default_factory=dict)

    @property
    def key(self) -> ModuleKey:
        return (self.declaring_file, self.name)

    @property
    def label(self) -> str:
        return f"{self.declaring_file}:{self.name}"
