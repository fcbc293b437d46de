"""
CLI utilities for command line reconstruction and output headers.
"""

from pathlib import Path

import click

COMMAND_NAME = "json_to_tszod"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context, return basic command
        return COMMAND_NAME

    if not cli_args:
        return COMMAND_NAME

    cmd_parts = [COMMAND_NAME]
    arguments = []
    options = []

    for param in click_command.params:
        param_name = param.name
        if param_name not in cli_args:
            continue

        value = cli_args[param_name]
        if not value:
            continue

        # Skip options left at their default value
        if isinstance(param, click.Option) and value == param.default:
            continue

        # File paths are shown by name only
        if isinstance(value, (str, Path)):
            path_obj = Path(str(value))
            formatted_value = path_obj.name if path_obj.exists() else str(value)
        else:
            formatted_value = str(value)

        if isinstance(param, click.Argument):
            arguments.append(formatted_value)
        elif isinstance(param, click.Option):
            flag = param.opts[0] if param.opts else f"--{param_name}"
            if param.is_flag:
                options.append(flag)
            else:
                options.extend([flag, formatted_value])

    cmd_parts.extend(arguments)
    cmd_parts.extend(options)

    return " ".join(cmd_parts)


def generation_comment(command_line: str) -> str:
    """Header comment placed at the top of written files."""
    return f"// Generated by {COMMAND_NAME}: {command_line}\n// Do not edit by hand.\n\n"
