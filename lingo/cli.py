"""Command line interface for inspecting and maintaining translations."""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from typing import Iterable, Optional

from .configuration import get_settings
from .documents import (
    available_translations,
    blank_translation,
    load_instance,
    load_shape,
    save_instance,
    translation_path,
)
from .entries import PluralEntry
from .errors import (
    ConfigurationError,
    DocumentError,
    LingoError,
    OverwriteRefusedError,
    StructuralMismatch,
    UnknownLanguageError,
)
from .numbers import default_registry
from .session import SessionSummary, TranslationSession


def _add_model_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--shape",
        required=True,
        help="Path to the JSON shape describing the translatable content.",
    )
    parser.add_argument(
        "--original",
        required=True,
        help="Path to the original-language JSON document.",
    )
    parser.add_argument(
        "--original-language",
        help="Language of the original document (default: from configuration).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lingo",
        description="Inspect and maintain translations of a product's strings.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed progress information.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    init = commands.add_parser("init", help="Create an empty translation document.")
    _add_model_arguments(init)
    init.add_argument("-l", "--language", required=True, help="Target language code.")
    init.add_argument("-m", "--module", help="Module name used to derive the output file name.")
    init.add_argument("-o", "--output", help="Output file path.")
    init.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Allow overwriting the output file if it already exists.",
    )

    status = commands.add_parser("status", help="Summarise how up to date a translation is.")
    _add_model_arguments(status)
    status.add_argument("translation", help="Path to the translation document.")

    stale = commands.add_parser("stale", help="List strings that need (re-)translation.")
    _add_model_arguments(stale)
    stale.add_argument("translation", help="Path to the translation document.")

    find = commands.add_parser("find", help="List strings containing a piece of text.")
    _add_model_arguments(find)
    find.add_argument("translation", help="Path to the translation document.")
    find.add_argument("query", help="Text to look for (case and accent insensitive).")
    find.add_argument(
        "--no-original",
        action="store_true",
        help="Do not search the original text.",
    )
    find.add_argument(
        "--no-translation",
        action="store_true",
        help="Do not search the translations.",
    )

    accept = commands.add_parser(
        "accept-all", help="Mark every string of a translation as up to date."
    )
    _add_model_arguments(accept)
    accept.add_argument("translation", help="Path to the translation document.")
    accept.add_argument("-o", "--output", help="Write the result here instead of in place.")
    accept.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Allow overwriting an existing output file.",
    )

    languages = commands.add_parser("languages", help="List available translation files.")
    languages.add_argument("module", help="Module name, e.g. 'myapp' for myapp.de.json.")
    languages.add_argument(
        "-d",
        "--directory",
        help="Translations directory (default: from configuration).",
    )
    return parser


def _open_session(args: argparse.Namespace, original_language: str) -> TranslationSession:
    shape = load_shape(pathlib.Path(args.shape))
    original = load_instance(shape, pathlib.Path(args.original))
    translation_file = pathlib.Path(args.translation)
    translation = load_instance(shape, translation_file)
    return TranslationSession(
        shape=shape,
        original=original,
        translation=translation,
        registry=default_registry(),
        original_language=original_language,
        path=translation_file,
    )


def print_summary(summary: SessionSummary) -> None:
    """Output a friendly report of a translation's state."""

    print(f"  Languages:       {summary.original_language} -> {summary.translation_language}")
    print(f"  Strings:         {summary.total_entries}")
    print(f"  Up to date:      {summary.up_to_date_entries}")
    print(f"  Out of date:     {summary.stale_entries}")


def run_command(args: argparse.Namespace, settings) -> int:
    original_language = getattr(args, "original_language", None) or settings.LINGO_ORIGINAL_LANGUAGE

    if args.command == "languages":
        directory = pathlib.Path(args.directory or settings.LINGO_TRANSLATIONS_DIR)
        registry = default_registry()
        found = available_translations(directory, args.module, registry)
        if not found:
            print(f"No translations of '{args.module}' found in {directory}.")
            return 0
        for language, path in found:
            info = registry.get(language)
            print(f"  {language:<8} {info.native_name} ({info.english_name})  {path}")
        return 0

    if args.command == "init":
        registry = default_registry()
        registry.get(args.language)
        shape = load_shape(pathlib.Path(args.shape))
        original = load_instance(shape, pathlib.Path(args.original))
        if args.output:
            output = pathlib.Path(args.output)
        else:
            module = args.module or shape.name
            output = translation_path(
                pathlib.Path(settings.LINGO_TRANSLATIONS_DIR), module, args.language
            )
        translation = blank_translation(shape, original, args.language)
        save_instance(shape, translation, output, force=args.force)
        print(f"Created {output}")
        return 0

    session = _open_session(args, original_language)

    if args.command == "status":
        print("\nTranslation status.")
        print_summary(session.summary())
        return 0

    if args.command == "stale":
        for entry in session.stale_entries():
            marker = "plural" if isinstance(entry, PluralEntry) else "plain"
            print(f"  {entry.key} ({marker})")
        return 0

    if args.command == "find":
        if not args.query:
            print("No search text given. Nothing to find.")
            return 2
        search_original = not args.no_original and settings.LINGO_FIND_ORIGINAL
        search_translation = not args.no_translation and settings.LINGO_FIND_TRANSLATION
        if not search_original and not search_translation:
            print("Both original and translation search are disabled. Nothing to search.")
            return 2
        matches = [
            entry
            for entry in session.index
            if entry.matches_substring(args.query, search_original, search_translation)
        ]
        if not matches:
            print("No matching strings found.")
            return 0
        for entry in matches:
            print(f"  {entry.key}")
        return 0

    if args.command == "accept-all":
        count = session.mark_all_up_to_date()
        destination = pathlib.Path(args.output) if args.output else session.path
        force = args.force or args.output is None
        session.save(destination, force=force)
        print(f"Marked {count} strings as up to date in {destination}")
        return 0

    raise ValueError(f"Unknown command '{args.command}'.")


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        settings = get_settings()
    except ConfigurationError as exc:
        print(exc)
        return 1

    logging.basicConfig(
        level="DEBUG" if args.verbose else settings.LINGO_LOG_LEVEL,
        format=settings.LINGO_LOG_FORMAT,
    )

    try:
        return run_command(args, settings)
    except FileNotFoundError as exc:
        print(f"File not found: {exc.filename or exc}")
        return 1
    except StructuralMismatch as exc:
        print(f"The translation does not match the declared shape: {exc}")
        return 1
    except UnknownLanguageError as exc:
        print(exc)
        return 2
    except OverwriteRefusedError as exc:
        print(exc)
        return 1
    except DocumentError as exc:
        print(exc)
        return 1
    except LingoError as exc:
        print(exc)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
