# cli.py
import logging
import click
from database.grid_fs import get_grid
from upload_storage.settings import get_settings
from upload_storage.storage.grid_fs import join_url

# Configure logging
logger = logging.getLogger(__name__)

@click.group()
def cli():
    """CLI commands for files stored in GridFS"""
    logging.basicConfig(
        level=get_settings().log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    click.echo("Current Configuration:")
    click.echo(f"  App Name: {settings.app_name}")
    click.echo(f"  MongoDB URI: {settings.mongodb_uri}")
    click.echo(f"  GridFS Bucket: {settings.grid_fs_bucket}")
    click.echo(f"  Access URL: {settings.grid_fs_access_url or '(not configured)'}")
    click.echo(f"  Log Level: {settings.log_level}")

@cli.command()
@click.argument("namespace")
@click.argument("path")
@click.argument("source", type=click.File("rb"))
@click.option("--content-type", default=None, help="Content type to store (guessed from PATH if omitted)")
def put(namespace, path, source, content_type):
    """Store SOURCE in GridFS at PATH"""
    grid_file = get_grid().put(path, source, namespace, content_type=content_type)
    click.echo(f"Stored {path} ({grid_file.length} bytes, {grid_file.content_type})")

@cli.command()
@click.argument("namespace")
@click.argument("path")
def cat(namespace, path):
    """Write the contents of PATH to stdout"""
    grid_file = get_grid().find(path, namespace)
    if grid_file is None:
        raise click.ClickException(f"File not found: {path}")
    click.get_binary_stream("stdout").write(grid_file.data)

@cli.command()
@click.argument("namespace")
@click.argument("path")
def stat(namespace, path):
    """Show metadata for PATH"""
    grid_file = get_grid().find(path, namespace)
    if grid_file is None:
        raise click.ClickException(f"File not found: {path}")

    access_url = get_settings().grid_fs_access_url
    click.echo(f"Path: {grid_file.filename}")
    click.echo(f"Content Type: {grid_file.content_type}")
    click.echo(f"Length: {grid_file.length}")
    click.echo(f"Uploaded: {grid_file.upload_date}")
    click.echo(f"URL: {join_url(access_url, path) if access_url else 'N/A'}")

@cli.command()
@click.argument("namespace")
@click.argument("path")
def rm(namespace, path):
    """Delete every version of PATH"""
    if not get_grid().delete(path, namespace):
        raise click.ClickException(f"File not found: {path}")
    click.echo(f"Deleted {path}")

if __name__ == "__main__":
    cli()
