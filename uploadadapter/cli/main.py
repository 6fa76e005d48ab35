"""Upload adapter CLI - Main commands."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

app = typer.Typer(
    name="uploadadapter",
    help="Upload images through the custom image upload adapter",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def build_options(base_api_url: Optional[str], api: Optional[str], token: Optional[str]) -> dict:
    """Build the ``custom_image_upload`` block from command line values."""
    from uploadadapter import StaticTokenProvider

    return {
        'base_api_url': base_api_url,
        'api': api,
        'auth_open_id_service': StaticTokenProvider(token) if token else None,
    }


def print_missing(missing) -> None:
    table = Table(title="Missing configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Diagnostic", style="red")
    for field in missing:
        table.add_row(field.value, field.error_code)
    console.print(table)


@app.command()
def check(
    base_api_url: str = typer.Option(None, "--base-api-url", "-b", envvar="UPLOAD_BASE_API_URL", help="Backend root URL"),
    api: str = typer.Option(None, "--api", "-a", envvar="UPLOAD_API", help="Upload endpoint path"),
    token: str = typer.Option(None, "--token", "-t", envvar="UPLOAD_AUTH_TOKEN", help="Bearer token"),
):
    """Check that the upload configuration is complete."""
    from uploadadapter import validate_config

    missing = validate_config(build_options(base_api_url, api, token))
    if missing:
        print_missing(missing)
        raise typer.Exit(1)

    console.print(f"[green]Configuration complete:[/green] {base_api_url}/{api}")


@app.command()
def upload(
    file_path: Path = typer.Argument(..., help="Local image to upload", exists=True, dir_okay=False),
    base_api_url: str = typer.Option(None, "--base-api-url", "-b", envvar="UPLOAD_BASE_API_URL", help="Backend root URL"),
    api: str = typer.Option(None, "--api", "-a", envvar="UPLOAD_API", help="Upload endpoint path"),
    token: str = typer.Option(None, "--token", "-t", envvar="UPLOAD_AUTH_TOKEN", help="Bearer token"),
    name: str = typer.Option(None, "--name", "-n", help="Custom file name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Upload an image and print its URL."""
    from uploadadapter import (
        Editor,
        UploadAborted,
        UploadError,
        custom_image_upload_adapter_plugin,
        read_upload_file,
        setup_logging,
        validate_config,
    )

    if verbose:
        logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
        setup_logging(logging.DEBUG)

    options = build_options(base_api_url, api, token)
    missing = validate_config(options)
    if missing:
        print_missing(missing)
        raise typer.Exit(1)

    editor = Editor(
        config={'custom_image_upload': options},
        plugins=[custom_image_upload_adapter_plugin]
    )

    async def do_upload():
        file = await read_upload_file(file_path, name=name)
        loader = editor.plugins.get('FileRepository').create_loader(file)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console
        ) as progress:
            task = progress.add_task(f"Uploading {file.name}", total=None)
            upload_task = asyncio.ensure_future(loader.upload())
            try:
                while not upload_task.done():
                    await asyncio.wait({upload_task}, timeout=0.1)
                    progress.update(task, total=loader.upload_total, completed=loader.uploaded)
            except asyncio.CancelledError:
                loader.abort()
                await asyncio.wait({upload_task})
                raise

        try:
            return upload_task.result()
        except UploadAborted:
            console.print("[yellow]Upload aborted[/yellow]")
            raise typer.Exit(1)
        except UploadError as e:
            console.print(f"[red]Upload failed: {e}[/red]")
            raise typer.Exit(1)

    response = run_async(do_upload())
    console.print(f"[green]Uploaded:[/green] {response['default']}")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
