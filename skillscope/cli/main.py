"""Command-line interface for skillscope.

This module provides a CLI for inspecting installed agent skills without
writing code. It reports which agents are installed, lists skills across all
agents, and validates SKILL.md files.

Commands:
    agents: Show installed agents and where their skills live
    list: List skills merged across agents
    validate: Check SKILL.md files against the naming and size rules
    show: Parse a single SKILL.md
    dirs: Show existing global and project skill directories

Example:
    $ skillscope agents --scan-root ~/code
    $ skillscope list --scope project --scan-root ~/code --json
    $ skillscope validate ~/.claude/skills/pdf/SKILL.md
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from skillscope.config import SCAN_ROOTS_ENV, resolve_scan_roots
from skillscope.exceptions import SkillsError
from skillscope.models import ScopeFilter
from skillscope.observability.audit import JSONLAuditSink
from skillscope.rendering.json_renderer import JSONRenderer
from skillscope.runtime.repository import SkillsRepository


def _add_scan_root_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--scan-root",
        type=Path,
        action="append",
        dest="scan_roots",
        help=(
            "Directory to search for project skills (can be specified multiple "
            f"times; defaults to ${SCAN_ROOTS_ENV})"
        ),
    )


def _add_json_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of text",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="skillscope",
        description="Discover and validate agent skills",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log skipped files and directories",
    )
    parser.add_argument(
        "--audit-log",
        type=Path,
        help="Append audit events to this JSONL file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Agents command
    agents_parser = subparsers.add_parser(
        "agents",
        help="Show installed agents",
        description="Show every known agent, whether it is installed, and its skills",
    )
    _add_scan_root_argument(agents_parser)
    _add_json_argument(agents_parser)

    # List command
    list_parser = subparsers.add_parser(
        "list",
        help="List skills across agents",
        description="List skills, merging copies exposed to several agents",
    )
    list_parser.add_argument(
        "--scope",
        choices=[scope.value for scope in ScopeFilter],
        default=ScopeFilter.ALL.value,
        help="Which skills to list (default: all)",
    )
    _add_scan_root_argument(list_parser)
    _add_json_argument(list_parser)

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate SKILL.md files",
        description="Check SKILL.md files against the naming and size rules",
    )
    validate_parser.add_argument(
        "paths",
        type=Path,
        nargs="+",
        help="SKILL.md files, or skill directories containing one",
    )
    _add_json_argument(validate_parser)

    # Show command
    show_parser = subparsers.add_parser(
        "show",
        help="Parse a single SKILL.md",
        description="Print the metadata and body of one SKILL.md",
    )
    show_parser.add_argument("path", type=Path, help="SKILL.md file or skill directory")
    _add_json_argument(show_parser)

    # Dirs command
    dirs_parser = subparsers.add_parser(
        "dirs",
        help="Show existing skill directories",
        description="Show global skill directories and project skill directories under --cwd",
    )
    dirs_parser.add_argument(
        "--cwd",
        type=Path,
        help="Project directory to check (default: current directory)",
    )
    _add_json_argument(dirs_parser)

    return parser


def _skill_file(path: Path) -> Path:
    if path.is_dir():
        return path / "SKILL.md"
    return path


def _create_repository(args: argparse.Namespace) -> SkillsRepository:
    audit_sink = JSONLAuditSink(args.audit_log) if args.audit_log else None
    return SkillsRepository(
        scan_roots=resolve_scan_roots(getattr(args, "scan_roots", None)),
        audit_sink=audit_sink,
    )


def cmd_agents(args: argparse.Namespace) -> int:
    """Execute the agents command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    repo = _create_repository(args)
    agents = repo.detect_agents()

    if args.json:
        print(JSONRenderer().render(agents))
        return 0

    detected = [agent for agent in agents if agent.detected]
    print(f"Detected {len(detected)} of {len(agents)} agent(s):\n")
    for agent in agents:
        marker = "✓" if agent.detected else "✗"
        print(f"  {marker} {agent.display_name} ({agent.id})")
        if not agent.detected:
            continue
        print(f"    Global: {agent.global_.path} ({len(agent.global_.skills)} skill(s))")
        for project in agent.projects:
            print(f"    Project: {project.project_root} ({len(project.skills)} skill(s))")

    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """Execute the list command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    repo = _create_repository(args)
    skills = repo.list_skills(args.scope)

    if args.json:
        print(JSONRenderer().render(skills, include_body=False))
        return 0

    if not skills:
        print("No skills found.")
        return 0

    print(f"Found {len(skills)} skill(s):\n")
    for skill in skills:
        print(f"  {skill.name} [{skill.scope.value}]")
        print(f"    Description: {skill.description}")
        print(f"    Location: {skill.install_path}")
        print(f"    Agents: {', '.join(skill.agents)}")
        if skill.license:
            print(f"    License: {skill.license}")
        print()

    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Execute the validate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if every file is valid, 1 otherwise)
    """
    repo = _create_repository(args)
    results = {}
    for path in args.paths:
        skill_file = _skill_file(path)
        results[str(skill_file)] = repo.validate_skill(skill_file)

    if args.json:
        print(JSONRenderer().render(results))
    else:
        for skill_file, result in results.items():
            status = "✓ Valid" if result.valid else "✗ Invalid"
            print(f"{skill_file}: {status}")
            for diagnostic in result.errors + result.warnings:
                print(f"  {diagnostic.severity}: [{diagnostic.field}] {diagnostic.message}")

    return 0 if all(result.valid for result in results.values()) else 1


def cmd_show(args: argparse.Namespace) -> int:
    """Execute the show command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    repo = _create_repository(args)
    skill = repo.parse_skill(_skill_file(args.path))

    if args.json:
        print(JSONRenderer().render(skill))
        return 0

    print(f"Name: {skill.name}")
    print(f"Description: {skill.description}")
    if skill.license:
        print(f"License: {skill.license}")
    if skill.compatibility:
        print(f"Compatibility: {skill.compatibility}")
    if skill.allowed_tools:
        print(f"Allowed tools: {skill.allowed_tools}")
    for key, value in (skill.metadata or {}).items():
        print(f"Metadata {key}: {value}")
    print()
    print(skill.body)

    return 0


def cmd_dirs(args: argparse.Namespace) -> int:
    """Execute the dirs command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    repo = _create_repository(args)
    directories = repo.skills_directories(args.cwd)

    if args.json:
        print(JSONRenderer().render(directories))
        return 0

    for label in ("global", "project"):
        print(f"{label.capitalize()}:")
        if not directories[label]:
            print("  (none)")
        for directory in directories[label]:
            print(f"  {directory}")

    return 0


_COMMANDS = {
    "agents": cmd_agents,
    "list": cmd_list,
    "validate": cmd_validate,
    "show": cmd_show,
    "dirs": cmd_dirs,
}


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the skillscope command is executed.
    It parses command-line arguments and dispatches to the appropriate
    command handler.
    """
    parser = create_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handler = _COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        exit_code = handler(args)
    except SkillsError as e:
        print(f"Error: {e}", file=sys.stderr)
        exit_code = 1
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
