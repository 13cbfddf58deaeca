import argparse
import json
import logging
import sys
from pathlib import Path

from codechat.lexer.registry import LexerRegistry
from codechat.processing import registry_for_settings, source_file_to_document, verify_round_trip
from codechat.services.file_io import read_source_text
from codechat.settings_schema import CodeChatSettings, log_level_value
from codechat.settings_store import SETTINGS_FILENAME, load_settings

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNSUPPORTED = 2


def _settings_path(explicit: str | None) -> Path | None:
    if explicit:
        return Path(explicit).expanduser()
    candidate = Path.cwd() / SETTINGS_FILENAME
    return candidate if candidate.is_file() else None


def _configure_logging(settings: CodeChatSettings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else log_level_value(settings)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _render(path: str, registry: LexerRegistry, settings: CodeChatSettings) -> int:
    result = source_file_to_document(path, registry, settings=settings)
    if result.unknown:
        print(f"{path}: unsupported file type", file=sys.stderr)
        return EXIT_UNSUPPORTED
    if not result.ok or result.document is None:
        print(f"{path}: {result.message}", file=sys.stderr)
        return EXIT_ERROR
    print(json.dumps(result.document.to_dict(), indent=2, ensure_ascii=False))
    return EXIT_OK


def _check(paths: list[str], registry: LexerRegistry) -> int:
    exit_code = EXIT_OK
    for path in paths:
        try:
            text = read_source_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            print(f"{path}: ERROR {exc}")
            exit_code = EXIT_ERROR
            continue
        result = verify_round_trip(text, Path(path).suffix, registry)
        if result.status == "unknown":
            print(f"{path}: unsupported")
        elif result.ok:
            print(f"{path}: ok")
        elif result.status == "mismatch":
            print(f"{path}: MISMATCH")
            exit_code = EXIT_ERROR
        else:
            print(f"{path}: ERROR {result.message}")
            exit_code = EXIT_ERROR
    return exit_code


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codechat",
        description="Translate source files to CodeChat documents and verify round trips.",
    )
    parser.add_argument("--settings", help=f"settings file (default: ./{SETTINGS_FILENAME} if present)")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="print the editable document for a file as JSON")
    render.add_argument("file")

    check = sub.add_parser("check", help="verify files survive lexing and reconstruction unchanged")
    check.add_argument("files", nargs="+")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = load_settings(_settings_path(args.settings))
    _configure_logging(settings, args.verbose)
    registry = registry_for_settings(settings)

    if args.command == "render":
        return _render(args.file, registry, settings)
    return _check(args.files, registry)


if __name__ == "__main__":
    sys.exit(main())
