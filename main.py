import argparse
import asyncio
import sys

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from config.config import Config
from config.messages import MessageCatalog
from orchestrator.core import SourcePipeline
from orchestrator.factory import create_pipeline
from tools.telegram.formatting import format_outcome_message
from utils.logger import LoggerConfig


def build_pipeline(config: Config) -> SourcePipeline:
    """
    Build the source pipeline for console use.

    Missing provider settings are reported up front; the pipeline still runs and
    surfaces them as a search error or unscored results.
    """
    missing = config.missing_keys()
    if missing:
        print(f"\033[93mWarning: missing settings {', '.join(missing)}\033[0m")
    print(f"Initialized FindOrigin ({config.get_provider_info()})")
    return create_pipeline(config)


async def find_sources(
    pipeline: SourcePipeline,
    catalog: MessageCatalog,
    text: str,
    source_type: str | None = None,
    extra_queries: list[str] | None = None,
) -> str:
    """Run one lookup and return the rendered reply."""

    async def print_progress(stage: str) -> None:
        sys.stdout.write(f"\r\033[93m{catalog.progress.get(stage, stage)}\033[0m")
        sys.stdout.flush()

    outcome = await pipeline.run(
        text,
        notify=print_progress,
        extra_queries=extra_queries,
        source_type=source_type,
    )

    # Clear the progress line
    sys.stdout.write("\r" + " " * 40 + "\r")
    sys.stdout.flush()
    return format_outcome_message(outcome, catalog)


def interactive_loop(pipeline: SourcePipeline, catalog: MessageCatalog, source_type: str | None) -> None:
    print("\n=== FindOrigin ===")
    print("Paste a text or a t.me post link. Type 'exit' to quit or 'help' for commands\n")

    while True:
        try:
            user_input = input("Text: ").strip()

            if not user_input:
                continue

            if user_input.lower() in ("exit", "quit"):
                print("\nGoodbye!")
                break

            if user_input.lower() == "help":
                print("\n=== Available Commands ===")
                print("help      - Show this help message")
                print("exit/quit - Exit the program\n")
                print(catalog.help)
                continue

            reply = asyncio.run(find_sources(pipeline, catalog, user_input, source_type=source_type))
            print(f"\n{reply}")

        except KeyboardInterrupt:
            print("\nExiting...")
            break
        except EOFError:
            break


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Find the likely original sources of a text")
    parser.add_argument("text", nargs="?", help="Text to look up; omit for interactive mode")
    parser.add_argument(
        "--source-type",
        choices=["official", "news", "blogs", "research"],
        help="Keep only sources of this kind",
    )
    parser.add_argument(
        "--query",
        action="append",
        dest="extra_queries",
        default=None,
        help="Additional search query (repeatable)",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    args = parser.parse_args(argv)

    LoggerConfig.setup_logging(level=args.log_level)

    config = Config()
    catalog = MessageCatalog.from_yaml()
    pipeline = build_pipeline(config)

    if args.text:
        reply = asyncio.run(
            find_sources(
                pipeline,
                catalog,
                args.text,
                source_type=args.source_type,
                extra_queries=args.extra_queries,
            )
        )
        print(reply)
        return 0

    interactive_loop(pipeline, catalog, args.source_type)
    return 0


if __name__ == "__main__":
    sys.exit(main())
