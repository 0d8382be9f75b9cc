"""
Application wiring and command-line entry point.
"""
import argparse
import asyncio
import sys
from pathlib import Path

from dishka import AsyncContainer, make_async_container

from pangram_annotator.api.exceptions.exception_handlers import error_message
from pangram_annotator.core.config import Config, config
from pangram_annotator.core.exceptions import PangramError
from pangram_annotator.core.logging import get_logger, set_service_context, setup_logging
from pangram_annotator.core.security import SecretProvider, SettingsSecretProvider, StaticSecretProvider
from pangram_annotator.document.host import TextRange
from pangram_annotator.document.memory import InMemoryDocument
from pangram_annotator.ioc import AppProvider
from pangram_annotator.services.session_controller import SessionController

__version__ = "0.1.0"

logger = get_logger(__name__)


def create_container(
    app_config: Config = config,
    secrets: SecretProvider | None = None,
) -> AsyncContainer:
    """
    Create the Dishka container with AppProvider.

    The config and the secret provider are passed as context; without an
    explicit provider the API key is read from the config.
    """
    return make_async_container(
        AppProvider(),
        context={
            Config: app_config,
            SecretProvider: secrets or SettingsSecretProvider(app_config),
        },
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="pangram-annotate",
        description="Highlight AI-generated and AI-assisted passages in a text file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Whole file
  PANGRAM_API_KEY=... pangram-annotate essay.txt

  # Only characters 120-980
  pangram-annotate essay.txt --start 120 --end 980
        """,
    )
    parser.add_argument("file", type=Path, help="UTF-8 text file to analyze")
    parser.add_argument("--start", type=int, help="Selection start (character offset)")
    parser.add_argument("--end", type=int, help="Selection end (character offset, exclusive)")
    parser.add_argument("--url", help="Override the classification endpoint URL")
    parser.add_argument("--api-key", help="API key to use instead of PANGRAM_API_KEY")
    parser.add_argument("--debug", action="store_true", help="Console logs at DEBUG level")
    return parser.parse_args(argv)


def _selection(args: argparse.Namespace, length: int) -> TextRange | None:
    if args.start is None and args.end is None:
        return None
    start = args.start if args.start is not None else 0
    end = args.end if args.end is not None else length
    return TextRange(start, end)


async def annotate_file(args: argparse.Namespace, app_config: Config) -> int:
    """Analyze one file and print the summary plus every annotation."""
    content = args.file.read_text(encoding="utf-8")
    document = InMemoryDocument(content, document_id=args.file.name)
    document.select(_selection(args, len(content)))

    secrets = StaticSecretProvider(args.api_key) if args.api_key is not None else None
    container = create_container(app_config, secrets)
    try:
        controller = await container.get(SessionController)
        try:
            outcome = await controller.run(document)
        except PangramError as e:
            print(error_message(e), file=sys.stderr)
            return 2
    finally:
        await container.close()

    if not outcome.ok:
        print(error_message(outcome.error), file=sys.stderr)
        return 1

    print(outcome.summary)
    for annotation in outcome.annotations:
        print(
            f"{annotation.range_start}-{annotation.range_end}\t"
            f"{annotation.category.value}\t{annotation.tooltip}"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    app_config = config
    if args.debug:
        app_config = app_config.model_copy(update={"debug": True})
    if args.url:
        app_config = app_config.model_copy(
            update={"api": app_config.api.model_copy(update={"url": args.url})}
        )

    setup_logging(
        level="DEBUG" if app_config.debug else "WARNING",
        json_logs=not app_config.debug,
    )
    set_service_context(app_config.app_name, __version__)

    try:
        return asyncio.run(annotate_file(args, app_config))
    except (OSError, ValueError) as e:
        print(f"pangram-annotate: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
