import argparse
import logging
import sys
from pathlib import Path
from traceback import format_exc

from ytt import transcribe
from ytt.core.config import (
    DEFAULT_LANGUAGE,
    DEFAULT_MODEL,
    ENV_VARS,
    MODEL_ALIASES,
    MODELS,
    load_settings,
    resolve_model,
)
from ytt.core.exceptions import YTTError
from ytt.core.logger_config import setup_logging
from ytt.core.paths import LOGS_DIR

logger = logging.getLogger(__name__)

DESCRIPTION = (
    "Generate a cleaned up transcript from YouTube autogenerated captions"
    " using an LLM."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ytt", description=DESCRIPTION)
    parser.add_argument("video", help="YouTube video URL or ID")
    parser.add_argument(
        "-p",
        "--path",
        type=Path,
        default=Path("."),
        help="save raw and cleaned up transcripts to path",
    )
    parser.add_argument(
        "-s", "--suffix", default="", help="append suffix to filenames"
    )
    parser.add_argument(
        "-o",
        "--output",
        help="cleaned transcript file ('-' streams it to stdout)",
    )
    parser.add_argument(
        "-r",
        "--raw",
        action="store_true",
        help="download raw transcript, don't clean it up using an LLM",
    )
    parser.add_argument(
        "-m",
        "--model",
        default=DEFAULT_MODEL,
        help=(
            f"model to use (default: {DEFAULT_MODEL}): "
            + ", ".join([*MODELS, *MODEL_ALIASES])
        ),
    )
    parser.add_argument(
        "-l",
        "--language",
        default=DEFAULT_LANGUAGE,
        help=f"caption language code (default: {DEFAULT_LANGUAGE})",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="fail when a model reply has no <transcript> block",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log progress details"
    )

    credentials = parser.add_argument_group(
        "credentials", "override the matching environment variables"
    )
    for field, env_var in ENV_VARS.items():
        credentials.add_argument(
            f"--{field.replace('_', '-')}",
            dest=field,
            metavar=env_var,
        )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.INFO if args.verbose else logging.WARNING)

    try:
        options = transcribe.TranscribeOptions(
            video=args.video,
            model=resolve_model(args.model),
            folder=args.path,
            suffix=args.suffix,
            raw_only=args.raw,
            output=args.output,
            language=args.language,
            strict=args.strict,
        )
        settings = load_settings(
            {field: getattr(args, field) for field in ENV_VARS}
        )
        transcribe.run(options, settings)
    except YTTError as e:
        logger.debug(format_exc())
        print(f"error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception:
        logger.critical("A critical, unhandled error occurred.")
        logger.critical(format_exc())
        print(
            f"\n!! A critical error occurred. See {LOGS_DIR} for details.",
            file=sys.stderr,
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
