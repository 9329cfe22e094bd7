"""CLI main entry point."""

import json
import logging
from pathlib import Path

import click

from .client import APIError, FEError, Gateway
from .config import Config
from .errors import DockyardException
from .form import ServiceForm, initial_config
from .log import setup as setup_log
from .schema import get_schema, list_services
from .widget import build_integration_snippet, normalize_widget_config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.toml"


def load_config(config_path: str | None) -> Config:
    """Load the given file, ``config.toml`` when present, or env/defaults."""
    if config_path:
        return Config.load_from_file(config_path)
    if Path(DEFAULT_CONFIG_FILE).is_file():
        return Config.load_from_file(DEFAULT_CONFIG_FILE)
    return Config.default()


def read_json(path: str) -> dict:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise click.ClickException(f"File not found: {path}")
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}")
    if not isinstance(data, dict):
        raise click.ClickException(f"Expected a JSON object in {path}")
    return data


def parse_assignment(assignment: str) -> tuple[str, object]:
    """Split ``path=value``; the value is read as JSON and falls back to a plain string."""
    path, sep, raw = assignment.partition("=")
    if not sep or not path:
        raise click.BadParameter(f"Expected PATH=VALUE, got '{assignment}'", param_hint="--set")
    try:
        return path, json.loads(raw)
    except json.JSONDecodeError:
        return path, raw


def echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def echo_errors(errors: dict[str, str]) -> None:
    for path, message in errors.items():
        click.echo(f"{path}\t{message}", err=True)


@click.group()
@click.option("--config", "-c", default=None, help="Configuration file path")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, config: str | None, verbose: bool):
    """Dockyard - gateway service configuration and widget tooling."""
    ctx.ensure_object(dict)
    try:
        cfg = load_config(config)
    except DockyardException as e:
        raise click.ClickException(str(e))
    ctx.obj["config"] = cfg
    setup_log(cfg.log_file, verbose=verbose)


@cli.command(name="schemas")
def schemas():
    """List configurable services."""
    click.echo("service\ttitle")
    for service in list_services():
        click.echo(f"{service}\t{get_schema(service).title}")


@cli.command(name="show-schema")
@click.argument("service")
def show_schema(service: str):
    """Print the field schema of SERVICE as JSON."""
    try:
        schema = get_schema(service)
    except DockyardException as e:
        raise click.ClickException(str(e))
    echo_json(schema.model_dump(mode="json"))


@cli.command(name="validate")
@click.argument("service")
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--set", "assignments", multiple=True, help="Override one field: PATH=VALUE")
@click.pass_context
def validate(ctx, service: str, file: str, assignments: tuple[str, ...]):
    """Validate a saved SERVICE config stored in FILE."""
    try:
        schema = get_schema(service)
    except DockyardException as e:
        raise click.ClickException(str(e))

    form = ServiceForm(schema, value=initial_config(schema, read_json(file)))
    for assignment in assignments:
        path, value = parse_assignment(assignment)
        try:
            form.set_value(path, value)
        except DockyardException as e:
            raise click.ClickException(str(e))

    errors = form.validate()
    if errors:
        echo_errors(errors)
        ctx.exit(1)
    echo_json(form.value)


@cli.command(name="normalize-widget")
@click.argument("file", type=click.Path(dir_okay=False), required=False)
def normalize_widget(file: str | None):
    """Print FILE merged onto the default widget config (defaults when omitted)."""
    echo_json(normalize_widget_config(read_json(file) if file else None))


@cli.command(name="snippet")
@click.argument("agent_id")
@click.option("--script-url", default=None, help="Widget script URL (overrides config)")
@click.pass_context
def snippet(ctx, agent_id: str, script_url: str | None):
    """Print the embed snippet for AGENT_ID."""
    cfg = ctx.obj["config"]
    click.echo(
        build_integration_snippet(
            agent_id,
            script_url if script_url is not None else cfg.widget.script_url,
            react_url=cfg.widget.react_umd_url,
            react_dom_url=cfg.widget.react_dom_umd_url,
        )
    )


@cli.command(name="login")
@click.argument("email")
@click.password_option("--password", "-p", confirmation_prompt=False)
@click.pass_context
def login(ctx, email: str, password: str):
    """Sign in and store the access token."""
    gateway = Gateway.from_config(ctx.obj["config"])
    try:
        gateway.auth.sign_in(email, password)
    except DockyardException as e:
        logger.error(f"Login failed for {email}: {e}")
        raise click.ClickException(str(e))
    click.echo(f"Logged in as {email}")


@cli.command(name="logout")
@click.pass_context
def logout(ctx):
    """Forget the stored access token."""
    Gateway.from_config(ctx.obj["config"]).auth.sign_out()
    click.echo("Logged out")


@cli.command(name="configure-service")
@click.argument("project_id")
@click.argument("service")
@click.argument("file", type=click.Path(dir_okay=False))
@click.pass_context
def configure_service(ctx, project_id: str, service: str, file: str):
    """Validate FILE against SERVICE and add it to PROJECT_ID."""
    try:
        schema = get_schema(service)
    except DockyardException as e:
        raise click.ClickException(str(e))

    gateway = Gateway.from_config(ctx.obj["config"])
    models, providers = gateway.catalog.load_catalog()
    form = ServiceForm(
        schema,
        models=models,
        providers=providers,
        value=initial_config(schema, read_json(file)),
    )

    submitted = []
    if not form.submit(submitted.append):
        echo_errors(form.errors)
        ctx.exit(1)

    result = gateway.projects.add_service(project_id, submitted[0])
    if isinstance(result, APIError):
        if result.validation:
            unmatched = form.apply_server_errors(result.validation.errors)
            echo_errors({**form.errors, **unmatched})
        raise click.ClickException(result.message)
    if isinstance(result, FEError):
        raise click.ClickException(result.error)

    logger.info(f"Service {schema.service} added to project {project_id}")
    echo_json(result)


@cli.command(name="serve")
@click.option("--host", "-h", default=None, help="Override host from config")
@click.option("--port", "-p", default=None, type=int, help="Override port from config")
@click.pass_context
def serve(ctx, host, port):
    """Serve schemas and widget config over HTTP."""
    import uvicorn

    from .api import create_app

    cfg = ctx.obj["config"]
    host = host or cfg.web.host
    port = port or cfg.web.port

    if cfg.web.debug:
        logger.warning("Debug mode is enabled. This should NOT be used in production.")

    logger.info(f"Starting server on {host}:{port}")
    uvicorn.run(create_app(cfg), host=host, port=port, log_level="debug" if cfg.web.debug else "info")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
