# src/buildmods/core/schema/scope.py
"""
Escopo de declaração: qual arquivo de configuração está declarando agora.

O evaluator mantém uma pilha de arquivos. Ela é empilhada em dois
momentos:

    - ao executar o corpo de um arquivo (`Evaluator._exec`)
    - ao chamar uma função definida em um arquivo de configuração; toda
      `def`/`lambda` é envolvida por `DeclarationScope.wrap` com o nome
      do arquivo onde foi escrita

Assim, o topo da pilha é sempre o arquivo onde a chamada em curso
aparece textualmente, independentemente de como o handler de rule foi
alcançado (nome global, container, argumento de função).

Invariantes:
    - Toda entrada empilhada é desempilhada, inclusive em caso de erro
    - `current` é None fora de qualquer avaliação
"""

from __future__ import annotations

import functools
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional


class DeclarationScope:
    """Pilha explícita de arquivos declarantes de uma run."""

    def __init__(self) -> None:
        self._files: List[str] = []

    @property
    def current(self) -> Optional[str]:
        return self._files[-1] if self._files else None

    @contextmanager
    def enter(self, filename: str) -> Iterator[None]:
        self._files.append(filename)
        try:
            yield
        finally:
            self._files.pop()

    def wrap(self, filename: str, func: Callable[..., Any]) -> Callable[..., Any]:
        """Envolve `func` para que suas chamadas ocorram sob `filename`."""

        @functools.wraps(func)
        def _scoped(*args: Any, **kwargs: Any) -> Any:
            with self.enter(filename):
                return func(*args, **kwargs)

        return _scoped

    def __len__(self) -> int:
        return len(self._files)
