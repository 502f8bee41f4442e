"""Script key parsing.

Turns raw ``"<type>:<match,...>"`` keys into typed ``ScriptKey`` tokens and
pairs each script with its ``"<key>::watch"`` sibling, if any.
"""

import logging
from typing import Dict, List, Mapping, Optional

from .errors import MalformedScriptCommand, UnknownScriptType
from .script import WATCH_SUFFIX, CompiledScript, ScriptKey, ScriptType

logger = logging.getLogger(__name__)


def is_watch_key(key: str) -> bool:
    """Whether a key supplies a watch command rather than a script."""
    return WATCH_SUFFIX in key


def parse_script_key(key: str) -> ScriptKey:
    """
    Parse a raw script key into its type and match tokens.

    Examples:
        "build:js,jsx" -> (BUILD, ("js", "jsx"))
        "mount:src" -> (MOUNT, ("src",))
        "run:lint" -> (RUN, ("lint",))

    Raises:
        UnknownScriptType: If the prefix is not a known script type
    """
    prefix, sep, match_list = key.partition(":")
    script_type = ScriptType.from_prefix(prefix)
    if script_type is None:
        known = ", ".join(t.value for t in ScriptType)
        raise UnknownScriptType(
            f'scripts[{key}]: "{prefix}" is not a known script type.',
            script_id=key,
            suggestion=f"Use one of: {known}",
        )
    match = tuple(match_list.split(",")) if sep else ()
    return ScriptKey(raw=key, type=script_type, match=match)


def expand_watch_command(watch_command: str, command: str) -> str:
    """Substitute the first ``$1`` placeholder with the script command."""
    return watch_command.replace("$1", command, 1)


def collect_watch_commands(raw_scripts: Mapping[str, str]) -> Dict[str, str]:
    """Map each script id to the raw watch command declared for it.

    Raises:
        MalformedScriptCommand: If ``::watch`` appears anywhere but the end
            of a key
    """
    watch_commands = {}
    for key, value in raw_scripts.items():
        if not is_watch_key(key):
            continue
        script_id, _, trailing = key.partition(WATCH_SUFFIX)
        if trailing:
            raise MalformedScriptCommand(
                f'scripts[{key}]: "{WATCH_SUFFIX}" must end the key.',
                script_id=key,
                suggestion=f'Rename it to "{script_id}{WATCH_SUFFIX}"',
            )
        if script_id not in raw_scripts:
            logger.debug("Ignoring %s: no script named %s", key, script_id)
            continue
        watch_commands[script_id] = value
    return watch_commands


def parse_scripts(raw_scripts: Mapping[str, str]) -> List[CompiledScript]:
    """
    Parse every primary entry of a raw script mapping.

    Watch suppliers are excluded from the result and attached to their
    sibling as ``watch_command``. Entries keep declaration order; arguments
    and plugins are filled in by later stages.
    """
    watch_commands = collect_watch_commands(raw_scripts)
    scripts = []
    for key, command in raw_scripts.items():
        if is_watch_key(key):
            continue
        script_key = parse_script_key(key)
        watch: Optional[str] = watch_commands.get(key)
        if watch:
            watch = expand_watch_command(watch, command)
        scripts.append(
            CompiledScript(
                id=script_key.raw,
                type=script_key.type,
                match=script_key.match,
                command=command,
                watch_command=watch,
            )
        )
    return scripts
