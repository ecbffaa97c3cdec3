"""CLI tool for inspecting chat widgets."""

import json
from pathlib import Path
from typing import Optional

import typer
import yaml
from jsonschema import validate as json_validate
from jsonschema.exceptions import ValidationError as JsonSchemaValidationError
from pydantic import ValidationError
from typing_extensions import Annotated

from chat_widgets.app import WidgetServices, build_widget_services
from chat_widgets.config import ChatWidgetsSettings, load_settings
from chat_widgets.observability.logging import setup_logging

app = typer.Typer(help="Chat Widgets CLI")


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Optional[Path], typer.Option("--config", "-c", help="Settings YAML file")
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Emit JSON logs to stderr")
    ] = False,
):
    """Parse model output and inspect registered widgets."""
    ctx.obj = {"config": config, "verbose": verbose}


def _services(ctx: typer.Context) -> WidgetServices:
    options = ctx.obj or {}
    try:
        settings = load_settings(options.get("config"))
    except (OSError, ValueError) as e:
        typer.echo(f"Error loading settings: {str(e)}", err=True)
        raise typer.Exit(code=1)
    if options.get("verbose"):
        setup_logging(settings.log_level)
    return build_widget_services(settings)


@app.command("parse")
def parse(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="File with model output, or '-' for stdin")],
):
    """Extracts widgets from model output and prints them as JSON."""
    if source == "-":
        text = typer.get_text_stream("stdin").read()
    else:
        path = Path(source)
        if not path.exists():
            typer.echo(f"Error: File not found: {path}", err=True)
            raise typer.Exit(code=1)
        text = path.read_text()

    services = _services(ctx)
    content, widgets = services.parser.parse(text)
    result = {
        "content": content,
        "widgets": [services.codec.to_payload(w) for w in widgets] if widgets else None,
    }
    typer.echo(json.dumps(result, indent=2))


@app.command("tools")
def tools(
    ctx: typer.Context,
    function_format: Annotated[
        bool,
        typer.Option("--function-format", help="Print function-tool descriptors"),
    ] = False,
):
    """Prints the tool descriptor of every template widget."""
    services = _services(ctx)
    if function_format:
        payload = services.tools_provider.to_function_tools()
    else:
        payload = [
            tool.model_dump(by_alias=True) for tool in services.tools_provider.get_tools()
        ]
    typer.echo(json.dumps(payload, indent=2))


@app.command("instructions")
def instructions(ctx: typer.Context):
    """Prints the system instructions given to the language model."""
    typer.echo(_services(ctx).instruction_provider.get_instructions())


@app.command("registry")
def registry(ctx: typer.Context):
    """Prints a summary of the registered widgets."""
    typer.echo(_services(ctx).widget_registry.summary())


@app.command("validate-config")
def validate_config(
    file_path: Annotated[Path, typer.Argument(help="Path to settings YAML file")],
):
    """Validates a settings YAML file against the settings schema."""
    if not file_path.exists():
        typer.echo(f"Error: File not found: {file_path}", err=True)
        raise typer.Exit(code=1)

    try:
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        typer.echo(f"Error parsing YAML: {str(e)}", err=True)
        raise typer.Exit(code=1)

    try:
        json_validate(instance=data or {}, schema=ChatWidgetsSettings.model_json_schema())
        ChatWidgetsSettings.model_validate(data or {})
    except JsonSchemaValidationError as e:
        typer.echo(f"Validation Error: {e.message}", err=True)
        if e.path:
            typer.echo(f"Path: {'.'.join(str(p) for p in e.path)}", err=True)
        raise typer.Exit(code=1)
    except ValidationError as e:
        typer.echo(f"Validation Error: {str(e)}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Config file {file_path} is valid.")


if __name__ == "__main__":
    app()
