# src/buildmods/core/workspace/__init__.py
"""
Workspace — registro de módulos declarados.

## Componentes

- **types**
  - `FileDependency`, `ModuleDependency`: dependências de uma declaração
  - `Module`: módulo identificado por (declaring_file, name)

- **registry**
  - `Workspace`: upsert por identidade e consulta de arquivos diretos
"""

from .registry import Workspace  # noqa: F401
from .types import FileDependency, Module, ModuleDependency, ModuleKey  # noqa: F401
