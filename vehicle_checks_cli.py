#!/usr/bin/env python3
"""Vehicle Checks management CLI."""

import os
import subprocess
import sys

import click

from vehicle_checks.vehicle.directory import VehicleDirectory


def _run(args: list[str], *, replace: bool = False) -> None:
    click.echo(
        f"  {click.style('>', dim=True)} {click.style(' '.join(args), dim=True)}\n"
    )
    if replace:
        os.execvp(args[0], args)
        return
    result = subprocess.run(args)
    if result.returncode != 0:
        click.echo(
            f"  {click.style('✗', fg='red')} exited with code {result.returncode}"
        )
        sys.exit(result.returncode)


def _ok(text: str) -> None:
    click.echo(f"  {click.style('✓', fg='green')} {text}")


def _header(text: str) -> None:
    click.echo(f"\n  {click.style(text, fg='cyan', bold=True)}\n")


@click.group()
def cli() -> None:
    """Vehicle Checks management CLI."""


@cli.command()
@click.argument("uvicorn_args", nargs=-1)
def app(uvicorn_args: tuple[str, ...]) -> None:
    """Start uvicorn with --reload."""
    _header("Starting Vehicle Checks API")
    _run(
        ["uv", "run", "uvicorn", "vehicle_checks.app:app", "--reload", *uvicorn_args],
        replace=True,
    )


@cli.command()
def vehicles() -> None:
    """List the vehicles checks can be recorded against."""
    _header("Vehicles")
    for vehicle in VehicleDirectory().get_vehicles():
        click.echo(
            f"  {click.style(vehicle.id, bold=True)}  {vehicle.registration:<8}  "
            f"{vehicle.year} {vehicle.make} {vehicle.model}"
        )


@cli.command()
@click.argument("pytest_args", nargs=-1)
def test(pytest_args: tuple[str, ...]) -> None:
    """Run pytest."""
    _header("Running tests")
    _run(["uv", "run", "pytest", "tests/", "-v", *pytest_args], replace=True)


@cli.command()
def lint() -> None:
    """Run mypy."""
    _header("Running mypy")
    _run(["uv", "run", "mypy", "vehicle_checks"])
    _ok("Type check passed")


if __name__ == "__main__":
    cli()
