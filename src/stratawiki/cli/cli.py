"""CLI entrypoint: Typer app definition and command registration"""

import typer

from stratawiki.cli.commands import render_cmd, search_cmd, serve_cmd


app = typer.Typer(name="stratawiki", no_args_is_help=True, help="Serve a directory of Markdown as a wiki")

app.command(name="serve")(serve_cmd)
app.command(name="render")(render_cmd)
app.command(name="search")(search_cmd)
