"""CLI entrypoint: Typer app definition and command registration"""

import typer

from notionmd.cli.commands import blocks_cmd, convert_cmd, render_cmd


app = typer.Typer(name="notionmd", no_args_is_help=True, help="Convert Notion pages to Markdown")

app.command(name="convert")(convert_cmd)
app.command(name="blocks")(blocks_cmd)
app.command(name="render")(render_cmd)
