# tests/conftest.py
"""
Fixtures compartilhados para testes do buildmods.

Este módulo define fixtures reutilizáveis que fornecem:
- configuração do host mínima e determinística
- contexto de avaliação controlado (EvalContext)
- workspace vazio e evaluator ligado a ele
- fontes de configuração representativas (arquivo `MODS`)

Decisões arquiteturais:
    - Fontes de configuração são strings, não arquivos, salvo quando o
      teste exercita leitura de disco (usa `tmp_path`)
    - Cada teste recebe um workspace próprio (nenhum estado global)
    - Imports do core são realizados de forma lazy para melhorar a
      clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Todas as fixtures são seguras para execução em paralelo
"""

import pytest
from datetime import datetime, timezone


# =====================================================
# Config / contexto
# =====================================================

@pytest.fixture
def dummy_config() -> dict:
    """
    Configuração efetiva mínima, equivalente aos defaults embutidos.

    Returns:
        dict: Configuração já resolvida (sem loader, sem merge).
    """
    return {
        "workspace": {"files": ["MODS"]},
        "prelude": {"path": None, "filename": "<prelude>"},
        "log": {"level": "INFO"},
    }


@pytest.fixture
def dummy_ctx(dummy_config):
    """
    EvalContext determinístico para testes.

    `run_id` e `created_at` são fixos para garantir reprodutibilidade.
    """
    from buildmods.core.eval_context import EvalContext

    return EvalContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        config=dummy_config,
    )


# =====================================================
# Workspace / evaluator
# =====================================================

@pytest.fixture
def workspace(dummy_ctx):
    """Workspace vazio com o contexto de teste anexado."""
    from buildmods.core.workspace import Workspace

    return Workspace(context=dummy_ctx)


@pytest.fixture
def evaluator(workspace, dummy_ctx):
    """Evaluator com o prelude embutido (`module`, `empty`)."""
    from buildmods.core.lang import Evaluator

    return Evaluator(workspace=workspace, context=dummy_ctx)


@pytest.fixture
def module_rule(workspace, dummy_ctx):
    """
    Handler equivalente ao `module` do prelude, ligado ao arquivo `MODS`.

    Permite testar o handler de invocação sem passar pelo evaluator.
    """
    from buildmods.core.schema import Attr, RuleFactory

    attr = Attr()
    rule = RuleFactory(workspace=workspace, declaring_file="MODS", context=dummy_ctx)
    return rule(attrs={"srcs": attr.files(), "deps": attr.modules()})


@pytest.fixture
def mods_source() -> str:
    """
    Conteúdo típico de um arquivo `MODS`.

    Declara:
        - `a`: dois arquivos, sem dependências de módulo
        - `b`: nenhum arquivo, depende de `a`
        - `c`: declarado via helper `empty` do prelude
    """
    return """\
module(name="a", srcs=["a.go", "b.go"], deps=[])
module(name="b", srcs=[], deps=["a"])
empty("c")
"""
