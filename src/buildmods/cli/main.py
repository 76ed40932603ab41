"""
buildmods CLI — consulta de módulos declarados.

Commands:
    buildmods files <name> [--file MODS]   — arquivos diretos de um módulo
    buildmods list                          — todos os módulos registrados

Exit codes:
    0 — sucesso
    1 — falha de consulta (módulo não registrado)
    2 — falha de configuração ou de avaliação (fatal)
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional

from buildmods import __version__
from buildmods.core.config import ConfigError, load_config
from buildmods.core.errors import exception_to_payload
from buildmods.core.eval_context import EvalContext
from buildmods.core.exceptions import BuildModsException, ModuleNotRegisteredError
from buildmods.core.lang import load_workspace
from buildmods.core.workspace import Module, Workspace


EXIT_OK = 0
EXIT_QUERY_FAILED = 1
EXIT_FATAL = 2


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_module_row(module: Module) -> str:
    files = sum(len(d.items) for d in module.file_deps.values())
    refs = sum(len(d.items) for d in module.module_deps.values())
    return f"{module.label}  files={files} modules={refs}"


def module_to_dict(module: Module) -> Dict[str, Any]:
    return {
        "declaring_file": module.declaring_file,
        "name": module.name,
        "files": {k: list(v.items) for k, v in module.file_deps.items()},
        "modules": {
            k: {"types": list(v.allowed_types), "items": list(v.items)}
            for k, v in module.module_deps.items()
        },
    }


def _report_error(exc: BaseException, as_json: bool) -> None:
    payload = exception_to_payload(exc)
    if as_json:
        print(json.dumps({"error": payload.to_dict()}, ensure_ascii=False), file=sys.stderr)
    else:
        print(payload.format(), file=sys.stderr)


def _dump_trace(context: EvalContext) -> None:
    level = (context.config.get("log") or {}).get("level", "INFO")
    for event in context.events_at_or_above(level):
        print(json.dumps(event, ensure_ascii=False, default=str), file=sys.stderr)


# =============================================================================
# CLI COMMANDS
# =============================================================================

def cmd_files(args: argparse.Namespace, workspace: Workspace, config: Dict[str, Any]) -> int:
    """Lista os arquivos diretos de um módulo."""
    declaring_file = args.file or config["workspace"]["files"][0]
    try:
        files = workspace.get_files(declaring_file, args.name)
    except ModuleNotRegisteredError as e:
        _report_error(e, args.json)
        return EXIT_QUERY_FAILED

    if args.json:
        print(json.dumps({"module": f"{declaring_file}:{args.name}", "files": files}))
    else:
        for path in files:
            print(path)
    return EXIT_OK


def cmd_list(args: argparse.Namespace, workspace: Workspace, config: Dict[str, Any]) -> int:
    """Lista todos os módulos registrados."""
    modules = workspace.list()
    if args.json:
        print(json.dumps([module_to_dict(m) for m in modules], ensure_ascii=False))
    else:
        for module in modules:
            print(format_module_row(module))
    return EXIT_OK


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--root", default=".", help="Workspace root directory (default: .)")
    common.add_argument("--config", default=None, help="Defaults config file (YAML/JSON)")
    common.add_argument("--local-config", default=None, help="Local override config file")
    common.add_argument("--json", action="store_true", help="Structured JSON output")
    common.add_argument("--trace", action="store_true", help="Dump evaluation events to stderr")

    parser = argparse.ArgumentParser(
        prog="buildmods",
        description="Evaluate module declaration files and query registered modules.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    files_parser = subparsers.add_parser("files", parents=[common], help="Show direct files of a module")
    files_parser.add_argument("name", help="Module name")
    files_parser.add_argument(
        "--file", default=None,
        help="Declaring file of the module (default: first of workspace.files)",
    )
    files_parser.set_defaults(handler=cmd_files)

    list_parser = subparsers.add_parser("list", parents=[common], help="List registered modules")
    list_parser.set_defaults(handler=cmd_list)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    try:
        config = load_config(defaults_path=args.config, local_path=args.local_config)
    except ConfigError as e:
        _report_error(e, args.json)
        return EXIT_FATAL

    context = EvalContext.create(config)
    try:
        workspace = load_workspace(config, root=args.root, context=context)
    except BuildModsException as e:
        _report_error(e, args.json)
        if args.trace:
            _dump_trace(context)
        return EXIT_FATAL

    status = args.handler(args, workspace, config)
    if args.trace:
        _dump_trace(context)
    return status


if __name__ == "__main__":
    sys.exit(main())
