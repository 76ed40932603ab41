# src/buildmods/__init__.py
"""
buildmods — declaração e registro de módulos de build.

Arquivos de configuração, escritos em uma pequena linguagem declarativa
embarcada, descrevem *módulos* nomeados e suas dependências de arquivos
e de outros módulos. O host avalia esses arquivos, coleta cada
declaração em um registry e responde consultas como "quais arquivos o
módulo M usa diretamente".

Arquitetura em alto nível:
    - core.schema    → kinds de atributo, fábrica de rules, handler de invocação
    - core.workspace → registry de módulos por (declaring_file, name)
    - core.lang      → prelude e evaluator da linguagem embarcada
    - core.config    → carregamento, merge e hashing da configuração do host
    - cli            → entrada de linha de comando

Limites explícitos:
    - Não resolve dependências transitivas entre módulos
    - Não persiste estado entre execuções
"""

from buildmods.core.lang import Evaluator, load_workspace
from buildmods.core.workspace import Module, Workspace

__version__ = "0.1.0"

__all__ = ["Evaluator", "Module", "Workspace", "load_workspace", "__version__"]
