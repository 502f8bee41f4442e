"""Argument extraction for mount and proxy scripts.

Mount and proxy commands are small command lines of their own:

    mount <dir> [--to /url]
    proxy <url> --to /url

They are tokenised on whitespace and parsed with argparse; any deviation
from the format is a ``MalformedScriptCommand`` naming the script.
"""

import argparse
from dataclasses import replace
from typing import List, Optional, Tuple

from .errors import MalformedScriptCommand
from .script import CompiledScript, MountArgs, ProxyArgs, ScriptArgs, ScriptType

MOUNT_FORMAT = "mount dir [--to /PATH]"
PROXY_FORMAT = "proxy http://SOME.URL --to /PATH"


class _CommandArgumentError(Exception):
    pass


class _CommandParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing usage and exiting."""

    def error(self, message):
        raise _CommandArgumentError(message)


def _build_parser(command: str) -> _CommandParser:
    parser = _CommandParser(prog=command, add_help=False, allow_abbrev=False)
    parser.add_argument("positionals", nargs="*")
    parser.add_argument("--to", default=None)
    return parser


def _split_command(
    script_id: str, command: str, expected: str, usage: str
) -> Tuple[List[str], Optional[str]]:
    """Return (positional tokens, --to value) for a mount/proxy command."""
    tokens = command.split()
    if not tokens or tokens[0] != expected:
        raise MalformedScriptCommand(
            f"scripts[{script_id}] must use the {expected} command",
            script_id=script_id,
            suggestion=f'Use the format: "{usage}"',
        )
    try:
        # Unknown flags are tolerated and ignored
        namespace, _ = _build_parser(expected).parse_known_intermixed_args(tokens[1:])
    except _CommandArgumentError as e:
        raise MalformedScriptCommand(
            f"scripts[{script_id}]: {e}",
            script_id=script_id,
            suggestion=f'Use the format: "{usage}"',
        ) from e
    return namespace.positionals, namespace.to


def _check_url_path(script_id: str, to_url: str) -> None:
    if not to_url.startswith("/"):
        raise MalformedScriptCommand(
            f'scripts[{script_id}]: "--to {to_url}" must be a URL path, and start with a "/"',
            script_id=script_id,
        )


def parse_mount_command(script_id: str, command: str) -> MountArgs:
    """
    Parse ``mount <dir> [--to /url]``.

    The URL defaults to ``/<dir>`` when ``--to`` is omitted.
    """
    positionals, to_url = _split_command(script_id, command, "mount", MOUNT_FORMAT)
    if len(positionals) != 1:
        raise MalformedScriptCommand(
            f'scripts[{script_id}] must use the format: "{MOUNT_FORMAT}"',
            script_id=script_id,
        )
    from_disk = positionals[0]
    if to_url is not None:
        _check_url_path(script_id, to_url)
    return MountArgs(from_disk=from_disk, to_url=to_url or f"/{from_disk}")


def parse_proxy_command(script_id: str, command: str) -> ProxyArgs:
    """Parse ``proxy <url> --to /url``; ``--to`` is required."""
    positionals, to_url = _split_command(script_id, command, "proxy", PROXY_FORMAT)
    if len(positionals) != 1 or to_url is None:
        raise MalformedScriptCommand(
            f'scripts[{script_id}] must use the format: "{PROXY_FORMAT}"',
            script_id=script_id,
        )
    _check_url_path(script_id, to_url)
    return ProxyArgs(from_url=positionals[0], to_url=to_url)


def extract_args(script: CompiledScript) -> Optional[ScriptArgs]:
    """Parse the command arguments of a script, if its type has any."""
    if script.type is ScriptType.MOUNT:
        return parse_mount_command(script.id, script.command)
    if script.type is ScriptType.PROXY:
        return parse_proxy_command(script.id, script.command)
    return None


def with_args(script: CompiledScript) -> CompiledScript:
    """Return the script with parsed arguments attached."""
    args = extract_args(script)
    if args is None:
        return script
    return replace(script, args=args)
