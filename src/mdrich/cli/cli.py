"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdrich.cli.commands import continue_cmd, export_cmd, main_callback, roundtrip_cmd, style_cmd


app = typer.Typer(name="mdrich", no_args_is_help=True, help="Markdown <-> styled rich text conversion")

app.callback()(main_callback)
app.command(name="style")(style_cmd)
app.command(name="export")(export_cmd)
app.command(name="roundtrip")(roundtrip_cmd)
app.command(name="continue-line")(continue_cmd)
