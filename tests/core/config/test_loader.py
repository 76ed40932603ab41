# tests/core/config/test_loader.py
"""
Testes do carregador de configuração do host (load_config).

Os testes asseguram que:
- sem arquivos, os defaults embutidos são usados
- um arquivo de defaults informado é obrigatório
- o arquivo local é opcional e tem prioridade
- formatos e estruturas inválidas são rejeitados
- valores inválidos de chaves conhecidas são detectados

Invariantes:
    - A configuração final é sempre um dicionário validado
    - Nenhuma configuração parcial é retornada em caso de erro
"""

import pytest
from pathlib import Path

try:
    from buildmods.core.config.loader import DEFAULT_CONFIG, load_config
    from buildmods.core.config.errors import (
        ConfigTypeConflictError,
        DefaultsNotFoundError,
        InvalidConfigRootTypeError,
        InvalidConfigValueError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_config = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o loader de configuração e suas exceções tipadas estejam
    disponíveis para os testes.

    Falha imediatamente, com mensagem que descreve os módulos esperados,
    em vez de produzir erros indiretos em cada teste.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/buildmods/core/config/loader.py (load_config)\n"
            "- src/buildmods/core/config/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


DEFAULTS_YAML = """\
workspace:
  files: [MODS, lib/MODS]
log:
  level: INFO
"""

LOCAL_YAML = """\
log:
  level: DEBUG
prelude:
  path: tools/prelude.star
"""


def test_builtin_defaults_when_no_files():
    """
    Verifica que, sem arquivos, a configuração resolvida é igual aos
    defaults embutidos e não os compartilha por referência.
    """
    _require_imports()
    out = load_config()
    assert out == DEFAULT_CONFIG
    out["workspace"]["files"].append("X")
    assert DEFAULT_CONFIG["workspace"]["files"] == ["MODS"]


def test_missing_defaults_raises(tmp_path: Path):
    _require_imports()
    with pytest.raises(DefaultsNotFoundError):
        load_config(defaults_path=str(tmp_path / "defaults.yaml"))


def test_missing_local_is_ok(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(DEFAULTS_YAML, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(tmp_path / "local.yaml"))
    assert out["workspace"]["files"] == ["MODS", "lib/MODS"]
    assert out["log"]["level"] == "INFO"


def test_load_defaults_and_local(tmp_path: Path):
    """
    Verifica o merge defaults + local:

        - valores do local sobrescrevem os defaults
        - chaves não sobrescritas são preservadas
        - chaves ausentes em ambos vêm dos defaults embutidos
    """
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    local = tmp_path / "local.yaml"
    defaults.write_text(DEFAULTS_YAML, encoding="utf-8")
    local.write_text(LOCAL_YAML, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(local))
    assert out["log"]["level"] == "DEBUG"
    assert out["workspace"]["files"] == ["MODS", "lib/MODS"]
    assert out["prelude"] == {"path": "tools/prelude.star", "filename": "<prelude>"}


def test_json_is_supported(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.json"
    defaults.write_text('{"workspace": {"files": ["BUILD"]}}', encoding="utf-8")
    assert load_config(defaults_path=str(defaults))["workspace"]["files"] == ["BUILD"]


def test_empty_file_means_builtin_defaults(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("", encoding="utf-8")
    assert load_config(defaults_path=str(defaults)) == DEFAULT_CONFIG


def test_invalid_root_type_raises(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("- just\n- a\n- list\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_config(defaults_path=str(defaults))


def test_unsupported_extension_raises(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.toml"
    defaults.write_text("[workspace]\nfiles = ['MODS']\n", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_config(defaults_path=str(defaults))


def test_type_conflict_raises(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("workspace: MODS\n", encoding="utf-8")
    with pytest.raises(ConfigTypeConflictError):
        load_config(defaults_path=str(defaults))


@pytest.mark.parametrize(
    "content",
    [
        "workspace:\n  files: []\n",
        "workspace:\n  files: [MODS, 3]\n",
        "log:\n  level: TRACE\n",
        "prelude:\n  filename: ''\n",
    ],
)
def test_invalid_values_raise(tmp_path: Path, content):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(content, encoding="utf-8")
    with pytest.raises(InvalidConfigValueError):
        load_config(defaults_path=str(defaults))
