# tests/core/schema/test_rule_handler.py
"""
Testes do handler de invocação de rules.

Este módulo valida o algoritmo de declaração de módulos:
- validação das keywords contra o schema
- separação em dependências de arquivo e de módulo
- obrigatoriedade de `name`
- registro no workspace sob o arquivo declarante ligado ao handler

Invariantes:
    - Toda falha de validação não registra nada
    - Uma invocação bem-sucedida registra exatamente um módulo
"""

import pytest

from buildmods.core.exceptions import (
    ArgumentTypeError,
    MissingRequiredFieldError,
    SchemaError,
    UnknownAttributeError,
)
from buildmods.core.schema import Attr, RuleFactory
from buildmods.core.workspace import FileDependency, ModuleDependency


def test_declaration_registers_module(module_rule, workspace):
    """
    Cenário canônico: `module(name="a", srcs=["a.go","b.go"], deps=[])`.

    O módulo é registrado sob ("MODS", "a") e `get_files` devolve os
    arquivos na ordem declarada.
    """
    result = module_rule(name="a", srcs=["a.go", "b.go"], deps=[])

    assert result is None
    assert len(workspace) == 1
    assert workspace.get_files("MODS", "a") == ["a.go", "b.go"]


def test_declaration_partitions_dependencies(workspace, dummy_ctx):
    attr = Attr()
    rule = RuleFactory(workspace=workspace, declaring_file="MODS", context=dummy_ctx)
    handler = rule(attrs={"srcs": attr.files(), "deps": attr.modules(types=["lib", "bin"])})

    handler(name="b", srcs=["b.c"], deps=["a"])

    module = workspace.get("MODS", "b")
    assert module.file_deps == {"srcs": FileDependency(items=("b.c",))}
    assert module.module_deps == {
        "deps": ModuleDependency(allowed_types=("lib", "bin"), items=("a",))
    }


def test_unknown_keyword_raises_and_registers_nothing(module_rule, workspace):
    with pytest.raises(UnknownAttributeError, match="Unexpected key: hdrs"):
        module_rule(name="a", srcs=["a.go"], hdrs=["a.h"])
    assert len(workspace) == 0


@pytest.mark.parametrize("kwargs", [{}, {"name": ""}, {"srcs": ["a.go"]}])
def test_missing_or_empty_name_raises(module_rule, workspace, kwargs):
    """
    Verifica que `name` ausente ou vazio falha com
    `MissingRequiredFieldError` e não registra nenhum módulo.
    """
    with pytest.raises(MissingRequiredFieldError, match="name parameter is required"):
        module_rule(**kwargs)
    assert len(workspace) == 0


def test_non_string_name_raises(module_rule, workspace):
    with pytest.raises(ArgumentTypeError):
        module_rule(name=42, srcs=[])
    assert len(workspace) == 0


@pytest.mark.parametrize("value", ["a.go", None, {"a.go": 1}, ["a.go", 1]])
def test_attribute_value_must_be_string_list(module_rule, workspace, value):
    with pytest.raises(ArgumentTypeError):
        module_rule(name="a", srcs=value)
    assert len(workspace) == 0


def test_tuple_is_accepted_as_list(module_rule, workspace):
    module_rule(name="a", srcs=("x.go", "y.go"))
    assert workspace.get_files("MODS", "a") == ["x.go", "y.go"]


def test_positional_arguments_rejected(module_rule, workspace):
    with pytest.raises(SchemaError):
        module_rule("a", srcs=[])
    assert len(workspace) == 0


def test_omitted_attributes_are_simply_absent(module_rule, workspace):
    module_rule(name="solo")
    module = workspace.get("MODS", "solo")
    assert dict(module.file_deps) == {}
    assert dict(module.module_deps) == {}
    assert workspace.get_files("MODS", "solo") == []


def test_files_concatenate_in_schema_order(workspace, dummy_ctx):
    """
    Verifica que múltiplos atributos `files` são concatenados na ordem de
    declaração do schema, independentemente da ordem das keywords.
    """
    attr = Attr()
    rule = RuleFactory(workspace=workspace, declaring_file="MODS", context=dummy_ctx)
    handler = rule(attrs={"hdrs": attr.files(), "srcs": attr.files(), "data": attr.files()})

    handler(data=["d.txt"], srcs=["a.c", "b.c"], name="lib", hdrs=["a.h"])

    assert workspace.get_files("MODS", "lib") == ["a.h", "a.c", "b.c", "d.txt"]


def test_declaration_is_logged(module_rule, dummy_ctx):
    module_rule(name="a", srcs=[], deps=[])
    declarations = [e for e in dummy_ctx.events if e["message"] == "declaration"]
    assert declarations[-1]["declaring_file"] == "MODS"
    assert declarations[-1]["name"] == "a"
    assert declarations[-1]["attrs"] == ["name", "srcs", "deps"]
