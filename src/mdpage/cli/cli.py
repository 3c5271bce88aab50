"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdpage.cli.commands import build_cmd, events_cmd


app = typer.Typer(name="mdpage", no_args_is_help=True, help="Wrap markdown documents in complete HTML pages")

app.command(name="build")(build_cmd)
app.command(name="events")(events_cmd)
