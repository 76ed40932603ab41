# src/buildmods/core/config/__init__.py
"""
Camada de configuração do buildmods.

Este pacote carrega, mescla, valida estruturalmente e identifica a
configuração do host que avalia os arquivos de módulos.

Responsabilidades do pacote:
    - Carregamento de arquivos (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Validação estrutural das chaves conhecidas
    - Geração de hash canônico para rastreabilidade

Limites explícitos:
    - Não avalia a linguagem de configuração embarcada
    - Não interage com o registry de módulos diretamente
"""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash  # noqa: F401
from .loader import DEFAULT_CONFIG, LOG_LEVELS, load_config, validate_config  # noqa: F401
from .merge import deep_merge  # noqa: F401
