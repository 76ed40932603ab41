# src/buildmods/core/schema/__init__.py
"""
Schema de declaração de módulos.

## Componentes

- **attrs**
  - `FilesKind`, `ModulesKind`: kinds fechados de atributo
  - `Attr`: valor predeclarado `attr` (`attr.files()`, `attr.modules()`)

- **convert**
  - `to_strings`: conversão de listas da linguagem em tuplas de strings

- **rule**
  - `RuleFactory`: valor predeclarado `rule`
  - `RuleHandler`: invocação de uma rule → registro no workspace
  - `RuleSchema`: schema copiado e imutável de uma rule

- **scope**
  - `DeclarationScope`: pilha do arquivo declarante corrente
"""

from .attrs import ATTRIBUTE_KINDS, Attr, AttributeKind, FilesKind, ModulesKind  # noqa: F401
from .convert import to_strings  # noqa: F401
from .rule import RuleFactory, RuleHandler, RuleSchema, build_schema  # noqa: F401
from .scope import DeclarationScope  # noqa: F401
