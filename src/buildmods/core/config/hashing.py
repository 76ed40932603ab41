# src/buildmods/core/config/hashing.py
"""
Hashing canônico da configuração efetiva do buildmods.

O hash identifica a configuração usada em uma avaliação e é registrado
no `EvalContext` da run, permitindo comparar duas execuções sobre o
mesmo workspace.

Decisão: o hash é calculado a partir de JSON canônico (sort_keys, separators).
"""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico (SHA-256) da configuração efetiva.

    Política de hashing (v1):
        - Serialização JSON canônica
        - Ordenação estável de chaves
        - Separadores compactos
        - Codificação UTF-8

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
