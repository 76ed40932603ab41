# src/buildmods/core/eval_context.py
"""
Contexto de avaliação compartilhado de uma run do buildmods.

Este módulo define o `EvalContext`, a estrutura canônica que acompanha
uma avaliação de arquivos de configuração: identidade da run,
configuração resolvida, log estruturado de eventos e warnings.

Princípios fundamentais:
    - Isolamento por execução (cada run possui seu próprio contexto)
    - Ausência de estado global compartilhado
    - Diagnóstico nunca altera o comportamento da avaliação

Invariantes:
    - Eventos sempre incluem `run_id`, `source`, `level` e `timestamp`
    - Warnings são agrupados por `source`

Limites explícitos:
    - Não avalia arquivos
    - Não registra módulos
    - Não imprime nada (a apresentação é responsabilidade da CLI)
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from buildmods.core.config.hashing import compute_config_hash
from buildmods.core.config.loader import LOG_LEVELS


@dataclass
class EvalContext:
    """
    Contexto de avaliação de uma run.

    O EvalContext consolida:
        - identidade da execução (run_id, created_at)
        - configuração resolvida e seu hash
        - eventos estruturados (declarações, registros, prints do programa)
        - warnings não fatais (ex.: módulo sobrescrito)
    """

    run_id: str
    created_at: datetime
    config: Dict[str, Any] = field(default_factory=dict)
    config_hash: Optional[str] = None

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    @classmethod
    def create(cls, config: Optional[Dict[str, Any]] = None) -> "EvalContext":
        config = dict(config or {})
        return cls(
            run_id=uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            config=config,
            config_hash=compute_config_hash(config) if config else None,
        )

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, source: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "source": source,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, source: str, message: str) -> None:
        if source not in self.warnings:
            self.warnings[source] = []
        self.warnings[source].append(message)
        self.log(source=source, level="WARNING", message=message)

    def events_at_or_above(self, level: str) -> List[Dict[str, Any]]:
        """Eventos com nível >= `level` (ordem de LOG_LEVELS)."""
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {level}")
        threshold = LOG_LEVELS.index(level)
        return [
            e for e in self.events
            if e["level"] in LOG_LEVELS and LOG_LEVELS.index(e["level"]) >= threshold
        ]
