# src/buildmods/core/lang/__init__.py
"""
Linguagem de configuração embarcada.

## Componentes

- **prelude**
  - `PRELUDE_SOURCE`, `PRELUDE_FILENAME`: bootstrap que define `module`
    e `empty(name)`

- **evaluator**
  - `Evaluator`: avaliação do prelude e dos arquivos, com ligação
    explícita do arquivo declarante e rollback em caso de erro
  - `load_workspace`: avalia todos os arquivos configurados
"""

from .evaluator import SAFE_BUILTINS, Evaluator, load_workspace  # noqa: F401
from .prelude import PRELUDE_FILENAME, PRELUDE_SOURCE  # noqa: F401
