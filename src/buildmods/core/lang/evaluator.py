# src/buildmods/core/lang/evaluator.py
"""
Evaluator da linguagem de configuração embarcada.

A linguagem é um dialeto restrito de Python, no estilo Starlark: cada
arquivo é analisado com `ast.parse`, verificado contra as construções
proibidas (import, nomes e atributos reservados, introspecção de
frames, classes, async) e então compilado e executado com uma tabela
curada de builtins.

Fluxo de uma run:
    1. O prelude é avaliado uma única vez com `rule` e `attr`
       predeclarados; seus globais públicos viram os predeclarados dos
       arquivos de configuração.
    2. Cada arquivo recebe um namespace próprio. O corpo do arquivo é
       executado sob `DeclarationScope.enter(filename)` e toda
       `def`/`lambda` escrita nele é envolvida pelo escopo do arquivo.
       Uma declaração é atribuída, portanto, ao arquivo onde a chamada
       aparece textualmente: chamadas feitas dentro de funções do
       prelude (ex.: `empty`) pertencem ao prelude, mesmo quando o
       handler chega como argumento ou via container.
    3. Qualquer erro aborta a avaliação do arquivo e restaura o snapshot
       do workspace tirado antes dele: um arquivo inválido não registra
       nenhum módulo.

Decisões arquiteturais:
    - Erros tipados do buildmods propagam sem alteração
    - Demais erros (sintaxe, nome indefinido, `fail()`) viram
      `ConfigEvaluationError` encadeado (`raise ... from e`)
    - `print` do programa vira evento no `EvalContext`

Limites explícitos:
    - Não resolve dependências entre módulos
    - Não avalia arquivos em paralelo (um escritor por workspace)
"""

from __future__ import annotations

import ast
import builtins
import functools
import traceback
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional, Union

from buildmods.core.eval_context import EvalContext
from buildmods.core.exceptions import BuildModsException, ConfigEvaluationError
from buildmods.core.schema import Attr, DeclarationScope, RuleFactory
from buildmods.core.workspace import Workspace

from .prelude import PRELUDE_FILENAME, PRELUDE_SOURCE


SAFE_BUILTINS = (
    "all",
    "any",
    "bool",
    "dict",
    "enumerate",
    "int",
    "len",
    "list",
    "max",
    "min",
    "range",
    "repr",
    "reversed",
    "sorted",
    "str",
    "tuple",
    "zip",
)

_SCOPE_NAME = "__declaration_scope__"

# atributos que expõem frames, código ou globais de funções
_BLOCKED_ATTRIBUTES = frozenset({
    "ag_code", "ag_frame",
    "cr_code", "cr_frame",
    "f_back", "f_builtins", "f_code", "f_globals", "f_locals",
    "gi_code", "gi_frame", "gi_yieldfrom",
    "tb_frame", "tb_next",
})


def _error_line(exc: BaseException, filename: str) -> Optional[int]:
    if isinstance(exc, SyntaxError) and exc.filename == filename:
        return exc.lineno
    if isinstance(exc, ConfigEvaluationError) and exc.details.get("line") is not None:
        return exc.details["line"]
    frames = [f for f in traceback.extract_tb(exc.__traceback__) if f.filename == filename]
    return frames[-1].lineno if frames else None


class _Restrictor(ast.NodeTransformer):
    """Rejeita construções fora do dialeto e envolve funções no escopo do arquivo."""

    def __init__(self, filename: str):
        self.filename = filename

    def _reject(self, node: ast.AST, what: str) -> None:
        line = getattr(node, "lineno", None)
        raise ConfigEvaluationError(
            message=f"{self.filename}:{line}: {what} is not allowed",
            details={"filename": self.filename, "line": line, "exception_class": "RestrictedSyntax"},
            hint="Arquivos de configuração não acessam import, I/O nem nomes reservados.",
        )

    def visit_Import(self, node: ast.AST) -> Any:
        self._reject(node, "import")

    visit_ImportFrom = visit_Import

    def visit_ClassDef(self, node: ast.ClassDef) -> Any:
        self._reject(node, "class definition")

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> Any:
        self._reject(node, "async function")

    def visit_Attribute(self, node: ast.Attribute) -> Any:
        if node.attr.startswith("_") or node.attr in _BLOCKED_ATTRIBUTES:
            self._reject(node, f"attribute '{node.attr}'")
        return self.generic_visit(node)

    def visit_Name(self, node: ast.Name) -> Any:
        if node.id.startswith("__"):
            self._reject(node, f"name '{node.id}'")
        return node

    def visit_FunctionDef(self, node: ast.FunctionDef) -> Any:
        self.generic_visit(node)
        node.decorator_list.insert(0, ast.Name(id=_SCOPE_NAME, ctx=ast.Load()))
        return node

    def visit_Lambda(self, node: ast.Lambda) -> Any:
        self.generic_visit(node)
        call = ast.Call(func=ast.Name(id=_SCOPE_NAME, ctx=ast.Load()), args=[node], keywords=[])
        return ast.copy_location(call, node)


def compile_restricted(source: str, filename: str) -> Any:
    """Analisa, verifica e compila `source` como o arquivo `filename`."""
    tree = ast.parse(source, filename, "exec")
    tree = _Restrictor(filename).visit(tree)
    ast.fix_missing_locations(tree)
    return compile(tree, filename, "exec")


class Evaluator:
    """Avalia o prelude e os arquivos de configuração de um workspace."""

    def __init__(
        self,
        *,
        workspace: Workspace,
        context: Optional[EvalContext] = None,
        prelude_source: str = PRELUDE_SOURCE,
        prelude_filename: str = PRELUDE_FILENAME,
    ):
        self.workspace = workspace
        self.context = context if context is not None else (workspace.context or EvalContext.create())
        self.prelude_source = prelude_source
        self.prelude_filename = prelude_filename
        self.scope = DeclarationScope()
        self._predeclared: Optional[Dict[str, Any]] = None

    @classmethod
    def from_config(
        cls,
        config: Dict[str, Any],
        *,
        workspace: Workspace,
        context: Optional[EvalContext] = None,
        root: Union[str, Path] = ".",
    ) -> "Evaluator":
        prelude_cfg = config["prelude"]
        source = PRELUDE_SOURCE
        if prelude_cfg.get("path"):
            source = _read_source(Path(root) / prelude_cfg["path"], prelude_cfg["filename"])
        return cls(
            workspace=workspace,
            context=context,
            prelude_source=source,
            prelude_filename=prelude_cfg["filename"],
        )

    # -----------------------------
    # Namespaces
    # -----------------------------
    def _builtins(self, filename: str) -> Dict[str, Any]:
        table: Dict[str, Any] = {name: getattr(builtins, name) for name in SAFE_BUILTINS}
        table["print"] = self._make_print(filename)
        table["fail"] = self._make_fail(filename)
        return table

    def _make_print(self, filename: str) -> Callable[..., None]:
        def _print(*args: Any, sep: str = " ") -> None:
            self.context.log(source=filename, level="INFO", message=sep.join(str(a) for a in args))
        return _print

    def _make_fail(self, filename: str) -> Callable[..., None]:
        def _fail(msg: Any = "fail") -> None:
            raise ConfigEvaluationError(
                message=f"{filename}: {msg}",
                details={"filename": filename, "exception_class": "fail"},
            )
        return _fail

    def predeclared(self) -> Dict[str, Any]:
        """Globais públicos do prelude (avaliado na primeira chamada)."""
        if self._predeclared is None:
            initial = {
                "rule": RuleFactory(
                    workspace=self.workspace,
                    declaring_file=self.prelude_filename,
                    context=self.context,
                    scope=self.scope,
                ),
                "attr": Attr(),
            }
            self._predeclared = self._exec(self.prelude_filename, self.prelude_source, initial)
        return dict(self._predeclared)

    # -----------------------------
    # Avaliação
    # -----------------------------
    def exec_source(self, filename: str, source: str) -> Dict[str, Any]:
        """Avalia `source` como o arquivo `filename`; retorna seus globais públicos."""
        return self._exec(filename, source, self.predeclared())

    def exec_file(self, path: Union[str, Path], *, filename: Optional[str] = None) -> Dict[str, Any]:
        path = Path(path)
        token = filename if filename is not None else str(path)
        return self.exec_source(token, _read_source(path, token))

    def exec_files(self, root: Union[str, Path], filenames: Iterable[str]) -> None:
        for name in filenames:
            self.exec_file(Path(root) / name, filename=name)

    def _exec(self, filename: str, source: str, namespace: Dict[str, Any]) -> Dict[str, Any]:
        env: Dict[str, Any] = {"__builtins__": self._builtins(filename), "__name__": filename}
        env.update(namespace)
        env[_SCOPE_NAME] = functools.partial(self.scope.wrap, filename)

        snapshot = self.workspace.snapshot()
        before = len(snapshot)
        self.context.log(source=filename, level="DEBUG", message="evaluate.start")

        try:
            code = compile_restricted(source, filename)
            with self.scope.enter(filename):
                exec(code, env)
        except BuildModsException as e:
            self.workspace.restore(snapshot)
            self._log_failure(filename, e)
            raise
        except Exception as e:
            self.workspace.restore(snapshot)
            self._log_failure(filename, e)
            raise ConfigEvaluationError(
                message=f"{filename}: {e.__class__.__name__}: {e}",
                details={
                    "filename": filename,
                    "line": _error_line(e, filename),
                    "exception_class": e.__class__.__name__,
                },
            ) from e

        self.context.log(
            source=filename,
            level="INFO",
            message="evaluate.done",
            registered=len(self.workspace) - before,
        )
        return {k: v for k, v in env.items() if not k.startswith("_")}

    def _log_failure(self, filename: str, exc: BaseException) -> None:
        self.context.log(
            source=filename,
            level="ERROR",
            message="evaluate.failed",
            error=str(exc),
            line=_error_line(exc, filename),
        )


def _read_source(path: Path, filename: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigEvaluationError(
            message=f"{filename}: cannot read {path}: {e.strerror or e}",
            details={"filename": filename, "path": str(path)},
            hint="Confira `workspace.files`, `prelude.path` e o diretório raiz.",
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigEvaluationError(
            message=f"{filename}: cannot decode {path} as UTF-8: {e.reason} at byte {e.start}",
            details={"filename": filename, "path": str(path), "exception_class": "UnicodeDecodeError"},
            hint="Arquivos de configuração devem ser UTF-8.",
        ) from e


def load_workspace(
    config: Dict[str, Any],
    *,
    root: Union[str, Path] = ".",
    context: Optional[EvalContext] = None,
) -> Workspace:
    """Cria um workspace e avalia nele todos os arquivos de `workspace.files`."""
    context = context if context is not None else EvalContext.create(config)
    context.log(
        source="workspace",
        level="INFO",
        message="load.start",
        config_hash=context.config_hash,
        files=list(config["workspace"]["files"]),
    )
    workspace = Workspace(context=context)
    evaluator = Evaluator.from_config(config, workspace=workspace, context=context, root=root)
    evaluator.predeclared()
    evaluator.exec_files(root, config["workspace"]["files"])
    return workspace
