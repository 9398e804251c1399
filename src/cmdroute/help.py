"""Usage and help rendering for registered commands."""

from collections.abc import Mapping
from dataclasses import dataclass

from cmdroute.commands.base import CommandDeclaration


@dataclass(frozen=True)
class HelpEntry:
    """One line of a help listing."""

    usage: str
    description: str
    permission: str

    @classmethod
    def from_declaration(cls, declaration: CommandDeclaration) -> "HelpEntry":
        return cls(
            usage=declaration.usage_line(),
            description=declaration.description,
            permission=declaration.permission,
        )


def group_declarations(
    declarations: Mapping[str, CommandDeclaration],
) -> dict[str, list[HelpEntry]]:
    """Group declarations by base command word.

    Groups are sorted by name; entries keep registration order.
    """
    groups: dict[str, list[HelpEntry]] = {}
    for declaration in declarations.values():
        groups.setdefault(declaration.base_command, []).append(
            HelpEntry.from_declaration(declaration)
        )
    return {name: groups[name] for name in sorted(groups)}


def render_usage(declaration: CommandDeclaration) -> str:
    """Usage line for one command, preferring the author's usage text."""
    if declaration.usage:
        return f"/{declaration.usage}"
    return f"/{declaration.usage_line()}"


def render_help_text(
    declarations: Mapping[str, CommandDeclaration],
    title: str = "Commands",
) -> str:
    """Plain-text help listing for all declarations."""
    lines = [f"=== {title} ==="]
    for base, entries in group_declarations(declarations).items():
        lines.append("")
        lines.append(f"/{base}:")
        for entry in entries:
            lines.append(f"  /{entry.usage}")
            if entry.description:
                lines.append(f"    -> {entry.description}")
            if entry.permission:
                lines.append(f"    permission: {entry.permission}")
    return "\n".join(lines)


def usage_for_base(
    declarations: Mapping[str, CommandDeclaration], base_word: str
) -> list[str]:
    """Usage lines of every command under a base command word."""
    base = base_word.lower()
    return [
        render_usage(d) for d in declarations.values() if d.base_command == base
    ]
