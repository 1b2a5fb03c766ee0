"""CLI entrypoint: Typer app definition and command registration"""

import typer

from postdoc.cli.commands import check_cmd, parse_cmd


app = typer.Typer(name="postdoc", no_args_is_help=True, help="Blog post header and directive checker")

app.command(name="check")(check_cmd)
app.command(name="parse")(parse_cmd)
