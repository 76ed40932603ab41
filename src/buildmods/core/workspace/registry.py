# src/buildmods/core/workspace/registry.py
"""
Registro de módulos do workspace.

Este módulo define o `Workspace`, o armazenamento autoritativo de todos
os módulos declarados durante uma run, indexados por
(declaring_file, name).

Decisões arquiteturais:
    - O workspace é um objeto explícito com ciclo de vida da run
      (criado, populado, consultado, descartado), nunca estado global
    - Registrar a mesma identidade novamente sobrescreve o registro
      anterior (last write wins); não existe erro de duplicidade
    - `get_files` retorna apenas o conteúdo direto dos atributos `files`;
      atributos `modules` não são percorridos

Invariantes:
    - No máximo um escritor por workspace (avaliação single-threaded)
    - `list()` reflete a ordem do último registro de cada identidade

Limites explícitos:
    - Não valida argumentos (isso ocorre no handler de rule)
    - Não resolve dependências transitivas
    - Não avalia arquivos de configuração
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from buildmods.core.exceptions import ModuleNotRegisteredError
from buildmods.core.eval_context import EvalContext

from .types import FileDependency, Module, ModuleDependency, ModuleKey


_SOURCE = "workspace"


@dataclass
class Workspace:
    """
    Registro canônico de módulos de uma run.

    O `context` é opcional; quando presente, recebe eventos de registro e
    warnings de sobrescrita. O diagnóstico nunca altera o comportamento.
    """

    context: Optional[EvalContext] = None
    _modules: Dict[ModuleKey, Module] = field(default_factory=dict, init=False, repr=False)

    def register_module(
        self,
        declaring_file: str,
        name: str,
        file_deps: Mapping[str, FileDependency],
        module_deps: Mapping[str, ModuleDependency],
    ) -> None:
        key = (declaring_file, name)
        module = Module(
            declaring_file=declaring_file,
            name=name,
            file_deps=dict(file_deps),
            module_deps=dict(module_deps),
        )

        replaced = self._modules.pop(key, None) is not None
        self._modules[key] = module

        if self.context is not None:
            if replaced:
                self.context.add_warning(
                    source=_SOURCE,
                    message=f"module {module.label} redeclared; previous declaration replaced",
                )
            self.context.log(
                source=_SOURCE,
                level="DEBUG",
                message="module.replaced" if replaced else "module.registered",
                module=module.label,
                files={k: list(v.items) for k, v in module.file_deps.items()},
                modules={k: list(v.items) for k, v in module.module_deps.items()},
            )

    def get(self, declaring_file: str, name: str) -> Module:
        key = (declaring_file, name)
        if key not in self._modules:
            raise ModuleNotRegisteredError(
                message=f"Unable to find module {declaring_file}:{name}",
                details={"declaring_file": declaring_file, "name": name},
                hint="Confira o arquivo que declara o módulo e o nome informado.",
            )
        return self._modules[key]

    def get_files(self, declaring_file: str, name: str) -> List[str]:
        """Arquivos diretos do módulo, na ordem de declaração do schema."""
        module = self.get(declaring_file, name)
        files: List[str] = []
        for dep in module.file_deps.values():
            files.extend(dep.items)
        return files

    def list(self) -> List[Module]:
        return list(self._modules.values())

    # -----------------------------
    # Rollback de avaliação
    # -----------------------------
    def snapshot(self) -> Dict[ModuleKey, Module]:
        return dict(self._modules)

    def restore(self, snapshot: Mapping[ModuleKey, Module]) -> None:
        self._modules = dict(snapshot)

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, key: object) -> bool:
        return key in self._modules
