# src/buildmods/core/schema/rule.py
"""
Fábrica de rules e handler de invocação.

Este módulo implementa o núcleo de declaração do buildmods:

    module = rule(attrs=dict(srcs=attr.files(), deps=attr.modules()))
    module(name="a", srcs=["a.go"], deps=[])

- `RuleFactory` é o valor predeclarado `rule`. Cada chamada valida o
  schema e produz um `RuleHandler` que fecha sobre uma cópia dele.
- `RuleHandler` é chamado a cada declaração de módulo: valida as
  keywords contra o schema, separa dependências de arquivo e de módulo,
  e registra o `Module` no `Workspace`.

Identidade do arquivo declarante:
    O handler consulta, no momento da chamada, o topo do
    `DeclarationScope` mantido pelo evaluator: o arquivo onde a chamada
    aparece textualmente. `declaring_file` (o arquivo onde a rule foi
    criada) só é usado quando nenhum escopo está ativo, como em chamadas
    feitas diretamente pelo host. Nenhuma inspeção de frames é feita.

Invariantes:
    - Exatamente uma escrita no workspace por invocação bem-sucedida
    - Nenhuma escrita quando qualquer validação falha
    - Dependências são ordenadas pela ordem de declaração do schema
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from buildmods.core.eval_context import EvalContext
from buildmods.core.exceptions import (
    ArgumentTypeError,
    MissingRequiredFieldError,
    SchemaError,
    UnknownAttributeError,
)
from buildmods.core.workspace import FileDependency, ModuleDependency, Workspace

from .attrs import ATTRIBUTE_KINDS, AttributeKind, FilesKind, ModulesKind
from .convert import to_strings
from .scope import DeclarationScope


NAME_PARAM = "name"


@dataclass(frozen=True)
class RuleSchema:
    """Schema de uma rule: atributos tipados e labels de tipo da rule.

    `types` é armazenado para compatibilidade futura; nada o consulta.
    """

    attrs: Mapping[str, AttributeKind] = field(default_factory=dict)
    types: Tuple[str, ...] = ()


def _reject_positional(func: str, args: Tuple[Any, ...]) -> None:
    if args:
        raise SchemaError(
            message=f"{func}: positional argument is not supported",
            details={"function": func, "positional_count": len(args)},
            hint="Use apenas argumentos nomeados (keyword arguments).",
        )


def build_schema(attrs: Any = None, types: Any = None) -> RuleSchema:
    """Valida `attrs`/`type` de `rule()` e materializa um `RuleSchema`."""
    schema_attrs: Dict[str, AttributeKind] = {}

    if attrs is not None:
        if not isinstance(attrs, Mapping):
            raise ArgumentTypeError(
                message=f"rule: attrs must be a dict, got {type(attrs).__name__}",
                details={"argument": "attrs", "type": type(attrs).__name__},
            )
        for key, kind in attrs.items():
            if not isinstance(key, str):
                raise ArgumentTypeError(
                    message=f"rule: attribute name must be a string, got {type(key).__name__}",
                    details={"argument": "attrs", "type": type(key).__name__},
                )
            if key == NAME_PARAM:
                raise SchemaError(
                    message="rule: attribute 'name' is reserved",
                    details={"attribute": key},
                )
            if not isinstance(kind, ATTRIBUTE_KINDS):
                raise SchemaError(
                    message=f"rule: unsupported attribute kind for '{key}': {type(kind).__name__}",
                    details={"attribute": key, "kind": type(kind).__name__},
                    hint="Use attr.files() ou attr.modules(types=[...]).",
                )
            schema_attrs[key] = kind

    rule_types: Tuple[str, ...] = ()
    if types is not None:
        rule_types = to_strings(types, what="rule(type)")

    return RuleSchema(attrs=schema_attrs, types=rule_types)


class RuleHandler:
    """Handler de invocação de uma rule; o arquivo declarante vem do escopo ativo."""

    def __init__(
        self,
        *,
        schema: RuleSchema,
        workspace: Workspace,
        declaring_file: str,
        context: Optional[EvalContext] = None,
        scope: Optional[DeclarationScope] = None,
    ):
        self.schema = schema
        self.workspace = workspace
        self.declaring_file = declaring_file
        self.context = context
        self.scope = scope

    def _declaring_file(self) -> str:
        if self.scope is not None and self.scope.current is not None:
            return self.scope.current
        return self.declaring_file

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        _reject_positional("rule invocation", args)
        declaring_file = self._declaring_file()

        name = None
        file_deps: Dict[str, FileDependency] = {}
        module_deps: Dict[str, ModuleDependency] = {}

        for key, value in kwargs.items():
            if key == NAME_PARAM:
                if not isinstance(value, str):
                    raise ArgumentTypeError(
                        message=f"name: expected string, got {type(value).__name__}",
                        details={"argument": NAME_PARAM, "type": type(value).__name__},
                    )
                name = value
                continue

            if key not in self.schema.attrs:
                raise UnknownAttributeError(
                    message=f"Unexpected key: {key}",
                    details={"key": key, "declaring_file": declaring_file,
                             "known": list(self.schema.attrs)},
                )

            kind = self.schema.attrs[key]
            items = to_strings(value, what=key)

            if isinstance(kind, FilesKind):
                file_deps[key] = FileDependency(items=items)
            elif isinstance(kind, ModulesKind):
                module_deps[key] = ModuleDependency(allowed_types=kind.allowed_types, items=items)
            else:
                raise SchemaError(
                    message=f"unsupported attribute kind for '{key}': {type(kind).__name__}",
                    details={"attribute": key, "kind": type(kind).__name__},
                )

        if not name:
            raise MissingRequiredFieldError(
                message="name parameter is required",
                details={"declaring_file": declaring_file},
            )

        order = list(self.schema.attrs)
        file_deps = {k: file_deps[k] for k in order if k in file_deps}
        module_deps = {k: module_deps[k] for k in order if k in module_deps}

        if self.context is not None:
            self.context.log(
                source="rule",
                level="DEBUG",
                message="declaration",
                declaring_file=declaring_file,
                name=name,
                attrs=list(kwargs),
            )

        self.workspace.register_module(declaring_file, name, file_deps, module_deps)
        return None

    def __repr__(self) -> str:
        attrs = ", ".join(f"{k}={v}" for k, v in self.schema.attrs.items())
        return f"<rule {attrs} @ {self.declaring_file}>"


class RuleFactory:
    """Valor predeclarado `rule`.

    Handlers criados herdam o escopo da factory; seu `declaring_file` de
    fallback é o arquivo onde `rule(...)` foi chamada.
    """

    def __init__(
        self,
        *,
        workspace: Workspace,
        declaring_file: str,
        context: Optional[EvalContext] = None,
        scope: Optional[DeclarationScope] = None,
    ):
        self.workspace = workspace
        self.declaring_file = declaring_file
        self.context = context
        self.scope = scope

    def _declaring_file(self) -> str:
        if self.scope is not None and self.scope.current is not None:
            return self.scope.current
        return self.declaring_file

    def __call__(self, *args: Any, **kwargs: Any) -> RuleHandler:
        _reject_positional("rule", args)

        attrs = None
        types = None
        for key, value in kwargs.items():
            if key == "attrs":
                attrs = value
            elif key == "type":
                types = value
            else:
                raise SchemaError(
                    message=f"rule: unexpected key: {key}",
                    details={"function": "rule", "key": key},
                    hint="rule() aceita apenas `attrs` e `type`.",
                )

        return RuleHandler(
            schema=build_schema(attrs, types),
            workspace=self.workspace,
            declaring_file=self._declaring_file(),
            context=self.context,
            scope=self.scope,
        )

    def __repr__(self) -> str:
        return "<built-in function rule>"
