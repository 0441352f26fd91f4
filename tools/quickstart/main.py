"""
Azure Blob Storage quickstart CLI.

Creates a container, uploads a "Hello, World!" file, lists and downloads it,
then deletes everything again.

Usage:
    quickstart
    quickstart --local-dir ./scratch --no-pause
    quickstart --public-access private --page-size 1
"""

from pathlib import Path

import click
import structlog

from src.config import get_settings
from src.logging_config import configure_logging
from src.quickstart import QuickstartOptions, QuickstartRunner

logger = structlog.get_logger(__name__)


def wait_for_enter() -> None:
    """Block until the user presses Enter; end of input counts as Enter."""
    click.get_text_stream("stdin").readline()


@click.command()
@click.option(
    "--local-dir",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Folder for the temp files (default: Desktop)",
)
@click.option(
    "--content",
    default=None,
    help="Text written to the uploaded file",
)
@click.option(
    "--container-prefix",
    default=None,
    help="Prefix for the generated container name",
)
@click.option(
    "--public-access",
    type=click.Choice(["blob", "container", "private"]),
    default=None,
    help="Anonymous access level for the container",
)
@click.option(
    "--page-size",
    type=click.IntRange(min=1),
    default=None,
    help="Blobs per listing page",
)
@click.option(
    "--pause/--no-pause",
    default=True,
    help="Wait for Enter before cleaning up (default: pause)",
)
@click.option(
    "--log-level",
    default=None,
    help="Log level (default: LOG_LEVEL setting)",
)
def main(
    local_dir: Path | None,
    content: str | None,
    container_prefix: str | None,
    public_access: str | None,
    page_size: int | None,
    pause: bool,
    log_level: str | None,
):
    """Run the Azure Blob Storage quickstart."""
    settings = get_settings()
    configure_logging(log_level or settings.log_level, settings.log_format)

    options = QuickstartOptions.from_settings(settings)
    if local_dir is not None:
        options.local_dir = local_dir
    if content is not None:
        options.file_content = content
    if container_prefix is not None:
        options.container_prefix = container_prefix
    if public_access is not None:
        options.public_access = public_access
    if page_size is not None:
        options.page_size = page_size

    click.echo("Azure Blob Storage - Python quickstart sample")
    click.echo("")

    runner = QuickstartRunner(
        settings=settings,
        options=options,
        confirm_cleanup=wait_for_enter if pause else None,
    )
    result = runner.run()
    if result is None:
        raise SystemExit(1)

    logger.debug("Run summary", **result.model_dump(mode="json"))
    click.echo("")
    click.echo("Sample finished.")


if __name__ == "__main__":
    main()
