import json
import logging
import sys
from pathlib import Path

import click

from .cli_utils import generation_comment, reconstruct_command_line
from .pipeline import ConverterSettings, OutputStyle, convert_text
from .samples import SAMPLES, get_sample


@click.command()
@click.option("--name", "-n", default=None, type=str, help="Name of the root type (default: Root)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--style", default=None, type=click.Choice([s.value for s in OutputStyle]), help="Emit type aliases or interfaces")
@click.option("--strict", is_flag=True, default=False, help="Add .strict() to every Zod object schema")
@click.option("--detect-dates", is_flag=True, default=False, help="Recognize ISO-8601 date strings")
@click.option("--snake-to-camel", is_flag=True, default=False, help="Rename snake_case keys to camelCase in TypeScript output")
@click.option("--format/--no-format", "format_", default=None, help="Format output with prettier when available")
@click.option("--sample", "-s", default=None, type=click.Choice([s.name for s in SAMPLES]), help="Use a built-in sample as input")
@click.option("--list-samples", is_flag=True, default=False, help="List built-in samples and exit")
@click.option("--output-dir", "-o", default=None, type=click.Path(file_okay=False, resolve_path=True))
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", required=False, default=None, type=click.Path(exists=True, dir_okay=False, allow_dash=True))
def json_to_tszod(name, config, style, strict, detect_dates, snake_to_camel, format_, sample, list_samples, output_dir, verbose, path):
    """Generate TypeScript types, Zod schemas and an example value from sample JSON at PATH."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if list_samples:
        for s in SAMPLES:
            click.echo(f"{s.name}: {s.description}")
        return

    if config is not None:
        with open(config) as f:
            try:
                settings = ConverterSettings.from_dict(json.load(f))
            except (ValueError, TypeError) as e:
                raise click.BadParameter(str(e), param_hint="'--config'") from e
    else:
        settings = ConverterSettings()

    # CLI flags override the config file
    if name is not None:
        settings.root_type_name = name
    if style is not None:
        settings.output_style = OutputStyle(style)
    if strict:
        settings.strict_objects = True
    if detect_dates:
        settings.detect_dates = True
    if snake_to_camel:
        settings.snake_to_camel = True
    if format_ is not None:
        settings.formatter.enabled = format_

    if sample is not None:
        text = get_sample(sample).text
    elif path is None or path == "-":
        text = sys.stdin.read()
    else:
        text = Path(path).read_text(encoding="utf-8")

    result = convert_text(text, settings)

    for diagnostic in result.diagnostics:
        click.echo(str(diagnostic), err=True)

    if not result.is_valid:
        raise click.ClickException("Conversion failed, see diagnostics above.")

    if output_dir is None:
        for file_name, code in result.files.items():
            click.echo(f"// ---- {file_name} ----")
            click.echo(code)
        return

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    header = generation_comment(reconstruct_command_line(json_to_tszod))
    for file_name, code in result.files.items():
        with open(out / file_name, "w") as f:
            f.write(header + code)
    click.echo(f"Wrote {len(result.files)} files to {out} ({result.field_count} fields)", err=True)
