# cli.py
import logging

import click

from file_vault.config.settings import get_settings
from file_vault.dependencies import build_object_store
from file_vault.logging_config import configure_logging

# Configure logging
logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the File Vault API"""
    configure_logging(get_settings().log_level)


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    for key, value in settings.get_environment_dict().items():
        print(f"  {key}: {value}")


@cli.command()
@click.option("--host", default=None, help="Interface to bind (defaults to HOST)")
@click.option("--port", default=None, type=int, help="Port to listen on (defaults to PORT)")
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(host, port, reload):
    """Run the API with uvicorn"""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port
    logger.info(f"Starting File Vault API on {host}:{port} ({settings.deployment_mode} mode)")
    uvicorn.run("file_vault.main:create_app", factory=True, host=host, port=port, reload=reload)


@cli.command()
def init_store():
    """Create the store's tables/collections and indexes"""
    settings = get_settings()
    store = build_object_store(settings)
    try:
        store.init_collections()
        print(f"✅ Store initialized ({settings.deployment_mode} mode)")
    finally:
        store.close()


@cli.command()
def list_files():
    """List every stored file, oldest first"""
    settings = get_settings()
    store = build_object_store(settings)
    try:
        store.init_collections()
        records = store.list_all()
    finally:
        store.close()

    if not records:
        print("No files stored")
        return

    for record in records:
        created = record.created_at.isoformat() if record.created_at else "-"
        print(f"{record.name}\t{record.content_type}\t{record.size}\t{created}")
    print(f"{len(records)} file(s)")


if __name__ == "__main__":
    cli()
