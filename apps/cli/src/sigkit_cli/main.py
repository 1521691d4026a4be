from __future__ import annotations
import dataclasses
import json
import logging
import os

import typer

from sigkit import KeysetHandle, PublicKeySign, PublicKeyVerify, SigkitError, default_registry
import sigkit_signature
from sigkit_signature import key_templates

app = typer.Typer(add_completion=False, help="sigkit signature registry CLI")


@app.callback()
def _configure_logging() -> None:
    level = os.getenv("SIGKIT_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING))


def _registry():
    registry = default_registry()
    sigkit_signature.register(registry)
    return registry


@app.command("list-types")
def list_types() -> None:
    """List key types bound in the registry after signature registration."""
    registry = _registry()
    for type_url in registry.key_types():
        typer.echo(f"- {type_url} (new keys: {'yes' if registry.new_key_allowed(type_url) else 'no'})")


@app.command()
def config(
    as_json: bool = typer.Option(False, "--json", help="Emit the descriptor as JSON."),
) -> None:
    """Print the signature configuration descriptor in registration order."""
    cfg = sigkit_signature.latest()
    if as_json:
        typer.echo(json.dumps(dataclasses.asdict(cfg), indent=2))
        return
    typer.echo(f"config: {cfg.config_name}")
    for entry in cfg.entries:
        typer.echo(
            f"  {entry.catalogue_name:<22} {entry.primitive_name:<16} {entry.type_url} "
            f"v{entry.key_manager_version} new_key_allowed={entry.new_key_allowed}"
        )


@app.command()
def templates() -> None:
    """List template names usable with `demo`."""
    for name in key_templates.named_templates():
        typer.echo(f"- {name}")


@app.command()
def demo(
    name: str,
    message: str = typer.Option("hello", "--message", "-m", help="Message to sign."),
) -> None:
    """Generate a keyset from a template, sign, then verify with its public keyset."""
    available = key_templates.named_templates()
    template = available.get(name)
    if template is None:
        typer.echo(f"Unknown template '{name}'. Choose from: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)
    registry = _registry()
    data = message.encode("utf-8")
    try:
        private_handle = KeysetHandle.generate_new(template, registry)
        signature = private_handle.primitive(PublicKeySign, registry).sign(data)
        verifier = private_handle.public_keyset_handle(registry).primitive(PublicKeyVerify, registry)
        verifier.verify(signature, data)
    except SigkitError as exc:
        typer.echo(f"[SIG] {name}: verify=False ({exc})")
        raise typer.Exit(code=1)
    typer.echo(f"[SIG] {name}: verify=True ({len(signature)} byte signature)")


def app_main():
    app()


if __name__ == "__main__":
    app_main()
