"""Command-line interface: ``create-micro-frontend`` / ``python -m microfed``.

Every value can be passed as a flag; whatever is missing is asked for with a
Rich prompt, or taken from :class:`~microfed.config.Settings` when
``--no-input`` is given.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any, Optional

from rich.prompt import Confirm, IntPrompt, Prompt

from microfed.config import RemoteReference, Settings, build_configuration
from microfed.enums import Framework, MonorepoTool, PackageManager, Role
from microfed.errors import InvalidExposedModule, ScaffoldError
from microfed.federation.naming import is_valid_identifier
from microfed.scaffolder.generator import ProjectGenerator
from microfed.scaffolder.manifest import package_manager_command
from microfed.utils import (
    check_port_available,
    create_progress,
    print_error,
    print_header,
    print_next_steps,
    print_success,
    print_summary_table,
    print_warning,
)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-micro-frontend",
        description="Scaffold a Webpack Module Federation host or remote application",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-micro-frontend --host --name shell --remote-ref products=http://localhost:3001/remoteEntry.js\n"
            "  create-micro-frontend --remote --name products --port 3001 --framework vue\n"
            "  create-micro-frontend --host --name shop --monorepo turborepo --no-input\n"
        ),
    )

    role = parser.add_mutually_exclusive_group()
    role.add_argument("--host", action="store_true", help="Create a host application")
    role.add_argument("--remote", action="store_true", help="Create a remote application")

    parser.add_argument("--name", "-n", default=None, help="Project name")
    parser.add_argument("--port", "-p", default=None, help="Dev-server port (1024-65535)")
    parser.add_argument("--framework", default=None, help="react or vue")
    parser.add_argument(
        "--typescript",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Generate TypeScript sources (default: yes)",
    )
    parser.add_argument(
        "--monorepo",
        metavar="TOOL",
        default=None,
        help="Create a monorepo workspace managed by pnpm, nx or turborepo",
    )
    parser.add_argument("--package-manager", default=None, help="npm, yarn or pnpm")
    parser.add_argument(
        "--remote-ref",
        metavar="NAME=URL",
        action="append",
        default=[],
        help="Remote consumed by a host (repeatable)",
    )
    parser.add_argument(
        "--expose",
        metavar="PATH=LOCAL",
        action="append",
        default=[],
        help="Extra module exposed by a remote, e.g. ./Header=./src/components/Header",
    )
    parser.add_argument("--output", "-o", default=None, help="Output directory (default: .)")
    parser.add_argument(
        "--force", action="store_true", help="Write into a non-empty target directory"
    )
    parser.add_argument(
        "--no-input", action="store_true", help="Never prompt; use defaults for missing values"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="List every written file")
    return parser


def parse_exposes(pairs: list[str]) -> dict[str, str]:
    """Parse repeated ``--expose PATH=LOCAL`` values, keeping their order."""
    exposes: dict[str, str] = {}
    for pair in pairs:
        public_path, sep, local_path = pair.partition("=")
        if not sep:
            raise InvalidExposedModule(pair, "expected PATH=LOCAL")
        exposes[public_path.strip()] = local_path.strip()
    return exposes


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


class _Answers:
    """Resolves each value from a flag, a prompt or a default."""

    def __init__(self, interactive: bool) -> None:
        self.interactive = interactive

    def choice(self, value: Optional[str], question: str, choices: list[str], default: str) -> str:
        if value is not None:
            return value
        if not self.interactive:
            return default
        return Prompt.ask(question, choices=choices, default=default)

    def text(self, value: Optional[str], question: str, default: str) -> str:
        if value is not None:
            return value
        if not self.interactive:
            return default
        return Prompt.ask(question, default=default)

    def number(self, value: Optional[str], question: str, default: int) -> Any:
        if value is not None:
            return value
        if not self.interactive:
            return default
        return IntPrompt.ask(question, default=default)

    def confirm(self, value: Optional[bool], question: str, default: bool) -> bool:
        if value is not None:
            return value
        if not self.interactive:
            return default
        return Confirm.ask(question, default=default)


def _prompt_remotes(answers: _Answers) -> list[RemoteReference]:
    remotes: list[RemoteReference] = []
    if not answers.confirm(None, "Add remote applications now?", False):
        return remotes
    while True:
        default_port = 3001 + len(remotes)
        name = Prompt.ask("Remote name").strip()
        while not is_valid_identifier(name):
            print_warning(
                f"{name!r} is not a valid identifier; use letters, digits, '_' or '$'"
            )
            name = Prompt.ask("Remote name").strip()
        url = Prompt.ask(
            "Remote entry URL", default=f"http://localhost:{default_port}/remoteEntry.js"
        )
        remotes.append(RemoteReference(name=name, url=url.strip()))
        if not Confirm.ask("Add another remote?", default=False):
            return remotes


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``create-micro-frontend``."""
    args = build_parser().parse_args(argv)
    try:
        _run(args)
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)


def _run(args: argparse.Namespace) -> None:
    settings = Settings.from_env()
    updates: dict[str, Any] = {}
    if args.output is not None:
        updates["output_dir"] = Path(args.output)
    if args.force:
        updates["overwrite"] = True
    if args.verbose:
        updates["verbose"] = True
    settings = settings.model_copy(update=updates)

    answers = _Answers(interactive=not args.no_input)
    print_header("Micro-frontend scaffolding")

    if args.host or args.remote:
        role_value = Role.HOST.value if args.host else Role.REMOTE.value
    else:
        role_value = answers.choice(
            None, "Application role", [r.value for r in Role], Role.HOST.value
        )
    role = Role(role_value)

    name = answers.text(args.name, "Project name", Settings.default_name(role))
    port = answers.number(args.port, "Dev-server port", settings.default_port(role))
    framework = answers.choice(
        args.framework, "Framework", [f.value for f in Framework], settings.framework.value
    )
    typescript = answers.confirm(args.typescript, "Use TypeScript?", True)

    monorepo_tool = args.monorepo
    if monorepo_tool is None and answers.confirm(None, "Create inside a monorepo?", False):
        monorepo_tool = answers.choice(
            None, "Monorepo tool", [t.value for t in MonorepoTool], settings.monorepo_tool.value
        )
    package_manager = answers.choice(
        args.package_manager,
        "Package manager",
        [m.value for m in PackageManager],
        settings.package_manager.value,
    )

    config = build_configuration(
        role=role,
        name=name,
        port=port,
        framework=framework,
        typescript=typescript,
        is_monorepo=monorepo_tool is not None,
        monorepo_tool=monorepo_tool,
        package_manager=package_manager,
    )

    remotes = [RemoteReference.parse(pair) for pair in args.remote_ref]
    if config.is_host and not remotes and answers.interactive:
        remotes = _prompt_remotes(answers)
    exposes = parse_exposes(args.expose)

    generator = ProjectGenerator(config, remotes, exposes=exposes, settings=settings)

    summary = {
        "Role": config.role.value,
        "Name": config.raw_name,
        "Federation name": config.normalized_name,
        "Port": str(config.port),
        "Framework": config.framework.value,
        "TypeScript": "yes" if config.typescript else "no",
        "Monorepo": config.monorepo_tool.value if config.monorepo_tool else "no",
        "Package manager": config.package_manager.value,
    }
    if remotes:
        summary["Remotes"] = ", ".join(remote.name for remote in remotes)
    print_summary_table(summary, title="Project")

    if not asyncio.run(check_port_available(config.port)):
        print_warning(f"Port {config.port} is already in use on this machine")

    with create_progress() as progress:
        progress.add_task(f"Writing {config.raw_name}...", total=None)
        project_root = asyncio.run(generator.generate())

    print_success(f"Created {config.role.value} application at {project_root}")

    run_command = package_manager_command(config.package_manager, "run")
    print_next_steps(
        [
            f"cd {project_root}",
            package_manager_command(config.package_manager, "install"),
            f"{run_command} dev" if config.is_monorepo else f"{run_command} start",
        ]
    )
