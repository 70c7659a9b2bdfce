"""
bento CLI - render and inspect components from the shell.

Usage:
    bento render TARGET [--props JSON] [--slot NAME=CONTENT]... [--namespace NS] [--debug]
    bento inspect TARGET [--props JSON] [--namespace NS]

TARGET is either ``package.module:ClassName`` or a component name looked up
in the namespace module.
"""

from __future__ import annotations

import importlib
import inspect as pyinspect
import json
import logging

import click

from .component import Component
from .config import BentoConfig
from .errors import BentoError
from .registry import Bento
from .rendering import RenderContext


def _load_class(target: str, bento: Bento) -> type[Component]:
    if ":" not in target:
        return bento.resolve(target)

    module_name, _, attr_name = target.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import module '{module_name}': {e}") from e

    cls = getattr(module, attr_name, None)
    if not (pyinspect.isclass(cls) and issubclass(cls, Component)):
        raise click.BadParameter(f"'{target}' is not a Component subclass")
    return cls


def _parse_props(value: str | None) -> dict:
    if not value:
        return {}
    try:
        props = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"--props is not valid JSON: {e}") from e
    if not isinstance(props, dict):
        raise click.BadParameter("--props must be a JSON object")
    return props


def _parse_slots(values: tuple[str, ...]) -> dict[str, str]:
    slots = {}
    for value in values:
        name, sep, content = value.partition("=")
        if not sep:
            raise click.BadParameter(f"Slot '{value}' must be NAME=CONTENT")
        slots[name.strip() or "default"] = content
    return slots


def _build(target: str, props: str | None, slots: tuple[str, ...], config: BentoConfig) -> Component:
    bento = Bento(config)
    try:
        cls = _load_class(target, bento)
        return cls(_parse_props(props), slots=_parse_slots(slots), config=config)
    except BentoError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(package_name="bento-components")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output")
def cli(verbose: bool):
    """bento - server-side components with typed props and slots."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


@cli.command()
@click.argument("target")
@click.option("--props", "-p", help="Props as a JSON object")
@click.option("--slot", "-s", "slots", multiple=True, help="Slot content as NAME=CONTENT")
@click.option("--namespace", "-n", help="Module to look component names up in")
@click.option("--debug", is_flag=True, help="Render detailed error output")
def render(target: str, props: str | None, slots: tuple[str, ...], namespace: str | None, debug: bool):
    """Render a component to stdout."""
    overrides = {"debug": debug} if debug else {}
    if namespace:
        overrides["namespace"] = namespace
    config = BentoConfig.from_env(**overrides)

    component = _build(target, props, slots, config)
    click.echo(component.render_with_lifecycle(RenderContext(authenticated=debug)))


@cli.command()
@click.argument("target")
@click.option("--props", "-p", help="Props as a JSON object")
@click.option("--slot", "-s", "slots", multiple=True, help="Slot content as NAME=CONTENT")
@click.option("--namespace", "-n", help="Module to look component names up in")
def inspect(target: str, props: str | None, slots: tuple[str, ...], namespace: str | None):
    """Print resolved props, slots and part attributes as JSON."""
    config = BentoConfig.from_env(**({"namespace": namespace} if namespace else {}))
    component = _build(target, props, slots, config)

    report = {
        "component": component.component_name,
        "props": component.use_props(),
        "slots": component.slots.resolve(),
        "attributes": component.use_attributes(),
    }
    click.echo(json.dumps(report, indent=2, default=str))


def main():
    cli()


if __name__ == "__main__":
    main()
