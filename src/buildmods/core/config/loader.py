# src/buildmods/core/config/loader.py
"""
Loader canônico de configuração do buildmods.

Este módulo carrega, valida estruturalmente e resolve a configuração
efetiva do host: quais arquivos da linguagem embarcada são avaliados,
qual prelude de bootstrap é usado e qual o nível do trace de eventos.

A configuração é resolvida a partir de:
    - defaults embutidos (`DEFAULT_CONFIG`) ou um arquivo de defaults
    - um arquivo local de overrides (opcional)

Invariantes:
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults
    - A configuração retornada já passou por `validate_config`

Limites explícitos:
    - Não avalia arquivos de módulos
    - Não persiste configuração ou hash
"""

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

DEFAULT_CONFIG: Dict[str, Any] = {
    "workspace": {
        "files": ["MODS"],
    },
    "prelude": {
        "path": None,
        "filename": "<prelude>",
    },
    "log": {
        "level": "INFO",
    },
}


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo de configuração e valida sua estrutura básica.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def _section(config: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = config.get(key)
    if not isinstance(section, dict):
        raise InvalidConfigValueError(f"'{key}' deve ser um mapping")
    return section


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Valida estruturalmente a configuração efetiva.

    Regras (v1):
        - `workspace.files`: lista não vazia de strings não vazias
        - `prelude.path`: string ou null
        - `prelude.filename`: string não vazia
        - `log.level`: um de DEBUG, INFO, WARNING, ERROR

    Returns:
        Dict[str, Any]: a própria configuração (para encadeamento).

    Raises:
        InvalidConfigValueError: na primeira violação encontrada.
    """
    workspace = _section(config, "workspace")
    files = workspace.get("files")
    if not isinstance(files, list) or not files:
        raise InvalidConfigValueError("'workspace.files' deve ser uma lista não vazia")
    for i, item in enumerate(files):
        if not isinstance(item, str) or not item.strip():
            raise InvalidConfigValueError(f"'workspace.files[{i}]' deve ser string não vazia")

    prelude = _section(config, "prelude")
    path = prelude.get("path")
    if path is not None and not isinstance(path, str):
        raise InvalidConfigValueError("'prelude.path' deve ser string ou null")
    filename = prelude.get("filename")
    if not isinstance(filename, str) or not filename:
        raise InvalidConfigValueError("'prelude.filename' deve ser string não vazia")

    log = _section(config, "log")
    level = log.get("level")
    if level not in LOG_LEVELS:
        raise InvalidConfigValueError(f"'log.level' deve ser um de {LOG_LEVELS}")

    return config


def load_config(
    *,
    defaults_path: Optional[str] = None,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva do buildmods.

    Política de resolução:
        - Sem `defaults_path`, os defaults embutidos são a base
        - Com `defaults_path`, o arquivo é obrigatório e é mesclado
          sobre os defaults embutidos
        - O arquivo local é opcional; quando existe, tem prioridade
        - A resolução utiliza `deep_merge`

    Args:
        defaults_path (Optional[str]): Caminho para o arquivo de defaults.
        local_path (Optional[str]): Caminho opcional para overrides locais.

    Returns:
        Dict[str, Any]: Configuração final resolvida e validada.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults informado não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
        InvalidConfigValueError: Se a configuração final for inválida.
    """
    effective = deepcopy(DEFAULT_CONFIG)

    if defaults_path is not None:
        effective = deep_merge(effective, _load_file(Path(defaults_path)))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return validate_config(effective)
