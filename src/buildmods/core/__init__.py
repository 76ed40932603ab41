# src/buildmods/core/__init__.py
"""
Core do buildmods.

Este pacote reúne a implementação canônica do subsistema de declaração
e registro de módulos, independente da camada de linha de comando.

O core é projetado para ser:
    - determinístico (mesma entrada → mesmo registry)
    - explícito (arquivo declarante passado por contexto, nunca inferido
      de frames)
    - isolado por run (nenhum estado global)
"""
