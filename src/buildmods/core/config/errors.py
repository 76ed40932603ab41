# src/buildmods/core/config/errors.py
"""
Exceções canônicas da camada de configuração do buildmods.

Este módulo define a hierarquia de exceções utilizadas durante o
carregamento, a validação estrutural e a resolução da configuração do
host (quais arquivos avaliar, qual prelude usar, nível de trace).

Estas exceções não se confundem com os erros de declaração de módulos
(`buildmods.core.exceptions`): elas descrevem falhas do ambiente de
execução, não do programa de configuração avaliado.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de schema ou de declaração

Limites explícitos:
    - Não avalia arquivos de configuração da linguagem embarcada
    - Não realiza fallback ou recovery
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do buildmods.

    Todas as exceções levantadas durante carregamento, validação estrutural
    e resolução de configuração devem herdar desta classe.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração base (defaults)
    informado explicitamente não é encontrado.

    Decisões arquiteturais:
        - Quando nenhum arquivo de defaults é informado, os defaults
          embutidos (`DEFAULT_CONFIG`) são usados
        - Um caminho informado e inexistente é sempre erro fatal
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).
    """


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"workspace": {"files": ["MODS"]}}
        - override: {"workspace": "MODS"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidConfigValueError(ConfigError):
    """
    Exceção levantada quando uma chave conhecida possui valor inválido
    (tipo incorreto ou fora do domínio permitido).

    Exemplos:
        - `workspace.files` não é lista de strings
        - `log.level` fora de DEBUG/INFO/WARNING/ERROR
    """
