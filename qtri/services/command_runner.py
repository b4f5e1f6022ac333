"""Run the configured documentation command for a topic."""

from __future__ import annotations

import logging
import subprocess
import sys
from dataclasses import dataclass
from typing import Mapping

from qtri.settings_models import DEFAULT_COMMAND_KEY

log = logging.getLogger(__name__)

TOPIC_PLACEHOLDER = "%s"


@dataclass(frozen=True, slots=True)
class CommandResult:
    command_line: str
    output: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def resolve_command_template(commands: Mapping[str, str], platform: str | None = None) -> str:
    """Pick the template whose key occurs in ``platform``, else the default one."""
    platform_id = str(platform if platform is not None else sys.platform)
    for key, template in commands.items():
        if key == DEFAULT_COMMAND_KEY:
            continue
        if key and key in platform_id:
            return template
    return commands.get(DEFAULT_COMMAND_KEY, "")


def build_command_line(template: str, topic: str) -> str:
    return str(template or "").replace(TOPIC_PLACEHOLDER, str(topic or ""))


class CommandRunner:
    def __init__(self, commands: Mapping[str, str], *, platform: str | None = None) -> None:
        self._template = resolve_command_template(commands, platform)

    @property
    def template(self) -> str:
        return self._template

    def command_line(self, topic: str) -> str:
        return build_command_line(self._template, topic)

    def run(self, topic: str) -> CommandResult:
        command_line = self.command_line(topic)
        log.debug("Running %s", command_line)
        try:
            completed = subprocess.run(
                command_line,
                shell=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            log.warning("Could not start %s: %s", command_line, exc)
            return CommandResult(command_line, f"{exc}\n", 127)
        return CommandResult(command_line, completed.stdout or "", int(completed.returncode))


__all__ = [
    "TOPIC_PLACEHOLDER",
    "CommandResult",
    "CommandRunner",
    "resolve_command_template",
    "build_command_line",
]
