#!/usr/bin/env python3
# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
SkillHub Command Line
=====================

Inspect and validate a skill root. Handles:
1. validate - check every skill directory has its skill document
2. list     - show loaded skills and their triggers
3. match    - show which skills a piece of text activates
4. serve    - run the HTTP service

Usage:
    skillhub validate skills/           # Presence check, exit 1 on failure
    skillhub validate skills/ --strict  # Also parse every document
    skillhub match skills/ "help me write a pom.xml"
    skillhub serve
"""

import sys
import argparse
import logging
from typing import List, Optional

from skillhub.config import settings, configure_logging
from skillhub.core.exceptions import ConfigurationError, SkipWithWarning
from skillhub.core.skills import SkillLoader, SubstringMatcher, build_skill_context

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_CONFIG_ERROR = 2


# Colors for terminal output
class Colors:
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BLUE = '\033[94m'
    RESET = '\033[0m'
    BOLD = '\033[1m'


def print_step(msg: str):
    print(f"\n{Colors.BLUE}{Colors.BOLD}==>{Colors.RESET} {msg}")


def print_success(msg: str):
    print(f"  {Colors.GREEN}✓{Colors.RESET} {msg}")


def print_warning(msg: str):
    print(f"  {Colors.YELLOW}⚠{Colors.RESET} {msg}")


def print_error(msg: str):
    print(f"  {Colors.RED}✗{Colors.RESET} {msg}")


def _make_loader() -> SkillLoader:
    return SkillLoader(
        skill_filenames=settings.skill_filenames,
        max_file_size=settings.max_skill_file_size
    )


def cmd_validate(args: argparse.Namespace) -> int:
    """Report per skill directory whether its document is present (and valid with --strict)."""
    loader = _make_loader()
    print_step(f"Validating skills in {args.root}")

    failed: List[str] = []
    for status in loader.check(args.root):
        if status.error:
            print_error(f"{status.name}: INVALID ({status.error})")
            failed.append(status.name)
            continue

        if not status.has_document:
            print_error(f"{status.name}: MISSING ({' or '.join(loader.skill_filenames)})")
            failed.append(status.name)
            continue

        if args.strict:
            try:
                loader.load_skill(status.skill_dir)
            except SkipWithWarning as w:
                print_error(f"{status.name}: INVALID ({w.reason})")
                failed.append(status.name)
                continue

        print_success(f"{status.name}: OK")

    if failed:
        print(f"\n{Colors.RED}{len(failed)} invalid skill directories:{Colors.RESET} {', '.join(failed)}")
        return EXIT_INVALID

    print(f"\n{Colors.GREEN}All skill directories are valid{Colors.RESET}")
    return EXIT_OK


def cmd_list(args: argparse.Namespace) -> int:
    result = _make_loader().load(args.root)

    print_step(f"{len(result.registry)} skills in {args.root}")
    for skill in result.registry.list_all():
        print(f"  • {Colors.BOLD}{skill.skill_id}{Colors.RESET} - {skill.description}")
        if skill.triggers:
            print(f"    triggers: {', '.join(skill.triggers)}")
        else:
            print(f"    {Colors.YELLOW}no triggers{Colors.RESET}")

    for warning in result.warnings:
        print_warning(warning.message)
    return EXIT_OK


def cmd_match(args: argparse.Namespace) -> int:
    result = _make_loader().load(args.root)
    matcher = SubstringMatcher()

    matches = matcher.match(result.registry, args.text)
    if not matches:
        print("No skills activated")
        return EXIT_OK

    for match in matches:
        start, end = match.match_span
        print(f"{match.skill_id}\t{match.matched_trigger}\t{start}:{end}")

    if args.body:
        print()
        print(build_skill_context(result.registry[m.skill_id] for m in matches))
    return EXIT_OK


def cmd_serve(args: argparse.Namespace) -> int:
    from skillhub.main import run

    if args.root:
        settings.skills_root = args.root
    if args.port:
        settings.api_port = args.port
    run(settings)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skillhub",
        description="Validate, inspect and serve a skill root"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser(
        "validate", help="Check every skill directory has a skill document"
    )
    validate_parser.add_argument("root", help="Skill root directory")
    validate_parser.add_argument(
        "--strict",
        action="store_true",
        help="Also parse each document and fail on malformed frontmatter"
    )
    validate_parser.set_defaults(func=cmd_validate)

    list_parser = subparsers.add_parser("list", help="List loaded skills")
    list_parser.add_argument("root", help="Skill root directory")
    list_parser.set_defaults(func=cmd_list)

    match_parser = subparsers.add_parser("match", help="Show skills activated by text")
    match_parser.add_argument("root", help="Skill root directory")
    match_parser.add_argument("text", help="User text to match")
    match_parser.add_argument(
        "--body",
        action="store_true",
        help="Also print the rendered skill context"
    )
    match_parser.set_defaults(func=cmd_match)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service")
    serve_parser.add_argument("--root", help="Skill root directory (default: SKILLS_ROOT)")
    serve_parser.add_argument("--port", type=int, help="Port (default: API_PORT)")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings)

    try:
        return args.func(args)
    except ConfigurationError as e:
        print_error(e.message)
        return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
