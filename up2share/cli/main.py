"""up2share CLI - Main commands."""
import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

app = typer.Typer(
    name="up2share",
    help="up2sha.re file sharing CLI",
    add_completion=False
)
config_app = typer.Typer(help="Manage stored settings")
shares_app = typer.Typer(help="Manage shares")
app.add_typer(config_app, name="config")
app.add_typer(shares_app, name="shares")

console = Console()


def get_settings():
    """Settings stored in ~/.config/up2share/app_config.json"""
    from up2share.core.settings import JSONSettings
    return JSONSettings()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def make_client(**kwargs):
    """Build a client from stored settings, exiting if no API key is set."""
    from up2share import Up2ShareClient, SettingsError

    try:
        return Up2ShareClient(settings=get_settings(), **kwargs)
    except SettingsError as e:
        console.print(f"[red]{e} Run 'up2share config set-key' first.[/red]")
        raise typer.Exit(1)


# =============================================================================
# config
# =============================================================================

@config_app.command("set-key")
def set_key(
    api_key: str = typer.Option(None, "--key", "-k", help="up2sha.re API key"),
):
    """Save the API key."""
    if not api_key:
        api_key = typer.prompt("API key", hide_input=True)

    from up2share import SettingsError

    settings = get_settings()
    try:
        settings.save_api_key(api_key)
    except (ValueError, SettingsError) as e:
        console.print(f"[red]Error saving API key: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]API key saved to {settings.path}[/green]")


@config_app.command("show")
def show_config():
    """Show stored settings (API key masked)."""
    settings = get_settings()
    api_key = settings.load_api_key()
    masked = f"{api_key[:4]}{'*' * max(len(api_key) - 4, 0)}" if api_key else "[dim]not set[/dim]"

    console.print(f"[bold]File:[/bold] {settings.path}")
    console.print(f"[bold]API key:[/bold] {masked}")
    console.print(f"[bold]Start at login:[/bold] {settings.load_startup_status()}")
    console.print(f"[bold]Context menu:[/bold] {settings.load_context_menu_status()}")


@config_app.command("startup")
def set_startup(
    enabled: bool = typer.Argument(..., help="true/false"),
):
    """Store the start-at-login flag."""
    get_settings().save_startup_status(enabled)
    console.print(f"Start at login: {enabled}")


@config_app.command("context-menu")
def set_context_menu(
    enabled: bool = typer.Argument(..., help="true/false"),
):
    """Store the context menu flag."""
    get_settings().save_context_menu_status(enabled)
    console.print(f"Context menu: {enabled}")


# =============================================================================
# upload / file
# =============================================================================

@app.command()
def upload(
    file_path: Path = typer.Argument(..., help="Local file to upload"),
    chunk_size: int = typer.Option(10, "--chunk-size", "-c", min=1, help="Chunk size in MiB"),
    retries: int = typer.Option(4, "--retries", "-r", min=0, help="Retries per chunk"),
    timeout: float = typer.Option(120, "--timeout", help="Request timeout in seconds"),
    name: str = typer.Option(None, "--name", "-n", help="Remote file name"),
    share: bool = typer.Option(False, "--share", "-s", help="Create a share after upload"),
    password: str = typer.Option(None, "--password", "-p", help="Share password"),
    expires_at: str = typer.Option(None, "--expires-at", help="Share expiration (ISO 8601)"),
):
    """Upload a file to up2sha.re."""
    from up2share import Up2ShareClient, UploadError, Up2ShareException
    from up2share.core.upload.models import UploadProgress

    config = Up2ShareClient.create_config(timeout=timeout, max_retries=retries)

    async def do_upload():
        async with make_client(config=config, chunk_size=chunk_size * 1024 * 1024) as client:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console
            ) as progress:
                task = progress.add_task(f"Uploading {file_path.name}", total=100)

                def on_progress(p: UploadProgress):
                    progress.update(task, completed=p.percentage)

                try:
                    result = await client.upload(file_path, progress_callback=on_progress, name=name)
                except UploadError as e:
                    console.print(f"[red]Upload failed: {e}[/red]")
                    raise typer.Exit(1)

            console.print(f"[green]Uploaded:[/green] {result.filename}")
            console.print(f"File ID: {result.file_id}")
            console.print(f"Size: {result.file_size:,} bytes")

            if share:
                try:
                    created = await client.create_share(
                        result.file_id, password=password, expires_at=expires_at
                    )
                except Up2ShareException as e:
                    console.print(f"[red]Share failed: {e}[/red]")
                    raise typer.Exit(1)
                _print_share(created)

    run_async(do_upload())


@app.command("file")
def file_info(
    file_id: str = typer.Argument(..., help="File ID"),
):
    """Show file details."""
    from up2share import Up2ShareException

    async def show():
        async with make_client() as client:
            try:
                data = await client.get_file(file_id)
            except Up2ShareException as e:
                console.print(f"[red]{e}[/red]")
                raise typer.Exit(1)
        _print_mapping(_unwrap(data))

    run_async(show())


# =============================================================================
# shares
# =============================================================================

@shares_app.command("list")
def list_shares(
    page: int = typer.Option(1, "--page", min=1, help="Page number"),
):
    """List shares, newest first."""
    from up2share import Up2ShareException

    async def do_list():
        async with make_client() as client:
            try:
                data = await client.list_shares(page)
            except Up2ShareException as e:
                console.print(f"[red]Error fetching shares: {e}[/red]")
                raise typer.Exit(1)

        items = _unwrap(data)
        if not items:
            console.print("[yellow]No shares[/yellow]")
            return

        table = Table()
        table.add_column("ID", style="cyan")
        table.add_column("File")
        table.add_column("URL")
        table.add_column("Expires", style="dim")
        for item in items:
            file_data = _unwrap(item.get('file') or {})
            table.add_row(
                str(item.get('id', '')),
                str(file_data.get('filename') or file_data.get('name') or item.get('file_id', '')),
                str(item.get('url') or item.get('public_url') or ''),
                str(item.get('expires_at') or '-'),
            )
        console.print(table)

    run_async(do_list())


@shares_app.command("create")
def create_share(
    file_id: str = typer.Argument(..., help="File ID"),
    target_id: str = typer.Option(None, "--target-id", help="Target ID"),
    password: str = typer.Option(None, "--password", "-p", help="Share password"),
    expires_at: str = typer.Option(None, "--expires-at", help="Expiration (ISO 8601)"),
):
    """Create a share for a file."""
    from up2share import Up2ShareException

    async def do_create():
        async with make_client() as client:
            try:
                share = await client.create_share(file_id, target_id, password, expires_at)
            except Up2ShareException as e:
                console.print(f"[red]Error creating share: {e}[/red]")
                raise typer.Exit(1)
        _print_share(share)

    run_async(do_create())


@shares_app.command("get")
def get_share(
    share_id: str = typer.Argument(..., help="Share ID"),
):
    """Show one share."""
    from up2share import Up2ShareException

    async def do_get():
        async with make_client() as client:
            try:
                share = await client.get_share(share_id)
            except Up2ShareException as e:
                console.print(f"[red]Error retrieving share: {e}[/red]")
                raise typer.Exit(1)
        _print_mapping(_unwrap(share))

    run_async(do_get())


@shares_app.command("delete")
def delete_share(
    share_id: str = typer.Argument(..., help="Share ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete a share."""
    from up2share import Up2ShareException

    if not yes and not typer.confirm(f"Delete share {share_id}?"):
        raise typer.Exit(0)

    async def do_delete():
        async with make_client() as client:
            try:
                await client.delete_share(share_id)
            except Up2ShareException as e:
                console.print(f"[red]Error deleting share: {e}[/red]")
                raise typer.Exit(1)
        console.print(f"[green]Share {share_id} deleted[/green]")

    run_async(do_delete())


def _unwrap(data):
    """The API wraps payloads in {'data': ...}."""
    if isinstance(data, dict) and 'data' in data:
        return data['data']
    return data


def _print_mapping(data):
    if not isinstance(data, dict):
        console.print(data)
        return
    for key, value in data.items():
        console.print(f"[bold]{key}:[/bold] {value}")


def _print_share(share):
    data = _unwrap(share) or {}
    console.print("[green]Share created[/green]")
    _print_mapping(data)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
