"""
Main entry point for the Sentence Audio Builder.

Builds the sentence repetition track and the words and definitions track
for a sentence, gathering word definitions interactively.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional

from .audio.fragments import FragmentCodec
from .audio.production import ProductionAssembler
from .audio.sequence import SequenceAssembler
from .audio.silence import PacingConfig, default_registry
from .config import Config
from .errors import AudioBuilderError, error_handler
from .models import ExplicitNaming, ForeignPhraseDefinitionPair, Sentence


DONE_COMMANDS = {"-d", "--done"}


def setup_logging(verbose: bool = False):
    """Set up logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def is_done(user_input: str) -> bool:
    """Check whether the user asked to stop entering words."""
    return user_input.strip().lower() in DONE_COMMANDS


def gather_pairs_interactively(suggest_definition: Callable[[str], str],
                               input_func: Callable[[str], str] = input) -> List[ForeignPhraseDefinitionPair]:
    """
    Ask for foreign words one at a time and confirm their definitions.

    Pressing ENTER on the definition prompt accepts the machine translation.
    Typing -d or --done ends the list.

    Args:
        suggest_definition: Returns a default definition for a foreign word
        input_func: Prompt function (replaceable for tests)

    Returns:
        Pairs in the order they were entered
    """
    pairs: List[ForeignPhraseDefinitionPair] = []
    adjective = "first"

    while True:
        prompt = f"Please enter the {adjective} foreign language word and press ENTER."
        if adjective == "next":
            prompt += '\nOr type "--done" or "-d" to complete word definitions for this sentence.'
        print(prompt)
        foreign_word = input_func("> ").strip()
        adjective = "next"

        if is_done(foreign_word):
            break
        if not foreign_word:
            continue

        suggestion = suggest_definition(foreign_word)
        print(f"The suggested translation for {foreign_word} is: {suggestion}")
        print("Press ENTER to accept it, or type your own definition and press ENTER.")
        definition = input_func("> ").strip() or suggestion

        pairs.append(ForeignPhraseDefinitionPair(foreign_word, definition))

    return pairs


def build_sentence(english_text: str, prefix: str, words_file_name: str,
                   input_func: Callable[[str], str] = input) -> bool:
    """
    Build both tracks for one sentence.

    Returns:
        True if every track was written, False otherwise
    """
    from .audio_maker import AudioMaker
    from .services.concatenation import PydubConcatenator
    from .services.synthesis_service import GoogleSpeechSynthesisService
    from .services.translation_service import GoogleTranslationService

    folder_created = False
    try:
        Config.validate()
        sentence = Sentence(english_text)
        maker = AudioMaker(
            sentence=sentence,
            translation=GoogleTranslationService(Config.PROJECT_ID),
            synthesis=GoogleSpeechSynthesisService(),
            concatenator=PydubConcatenator(),
            silence_registry=default_registry(),
            language_code=Config.LANGUAGE_CODE,
            repeat_count=Config.NUMBER_OF_REPEATS,
            audio_parent_dir=Config.AUDIO_PARENT_DIR,
            pacing=PacingConfig(),
            english_language_code=Config.ENGLISH_LANGUAGE_CODE,
            max_workers=Config.MAX_GENERATION_WORKERS,
        )

        maker.sequence_assembler.silence_registry.missing()

        if maker.sentence_folder.exists():
            raise FileExistsError(f"Sentence folder already exists: {maker.sentence_folder}")

        foreign_text = maker.translate_sentence()
        print(f"Translation: {foreign_text}")

        for pair in gather_pairs_interactively(maker.suggest_definition, input_func):
            sentence.add_pair(pair)

        maker.make_sentence_folder()
        folder_created = True

        results = [
            maker.make_sentence_track(prefix),
            maker.make_word_audio_file(words_file_name),
        ]
    except (AudioBuilderError, OSError, ValueError) as e:
        error_handler.add_error(error_handler.handle_exception(e, {'sentence': english_text}))
        if folder_created:
            _remove_if_empty(maker.sentence_folder)
        return False

    for result in results:
        if not result.success:
            error_handler.add_error(error_handler.handle_exception(result.error))

    return all(result.success for result in results)


def _remove_if_empty(folder: Path) -> None:
    """Remove a sentence folder that a failed build left without any track."""
    if folder.is_dir() and not any(folder.iterdir()):
        folder.rmdir()
        logging.getLogger(__name__).info(f"Removed empty sentence folder: {folder}")


def assemble_directory(fragment_dir: Path, destination: Path) -> bool:
    """
    Assemble a staged fragment folder into a words and definitions track.

    Returns:
        True if the track was written, False otherwise
    """
    from .services.concatenation import PydubConcatenator

    registry = default_registry()
    try:
        segments = SequenceAssembler(registry).assemble_directory(
            fragment_dir, FragmentCodec(PacingConfig(), extension=registry.extension)
        )
        result = ProductionAssembler(PydubConcatenator(), extension=registry.extension).assemble(
            segments, destination.parent, ExplicitNaming(destination.name)
        )
    except (AudioBuilderError, OSError) as e:
        error_handler.add_error(error_handler.handle_exception(e, {'fragment_dir': str(fragment_dir)}))
        return False

    if not result.success:
        error_handler.add_error(error_handler.handle_exception(result.error))
    return result.success


def print_error_summary():
    """Print recorded errors with their first suggested action."""
    error_summary = error_handler.get_error_summary()
    if not error_summary['error_count'] and not error_summary['warning_count']:
        return

    print("\n" + "=" * 50)
    print("ISSUES DETECTED")
    print("=" * 50)
    for kind in ('warnings', 'errors'):
        for error in error_summary[kind]:
            print(f"   [{error['code']}] {error['message']}")
            if error['suggested_actions']:
                print(f"     Suggestion: {error['suggested_actions'][0]}")
    print("=" * 50)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sentence-audio-builder",
        description="Build spaced-repetition audio tracks for a sentence and its vocabulary",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build the sentence and vocabulary tracks")
    build.add_argument("sentence", nargs="?", help="English sentence (prompted if omitted)")
    build.add_argument("--language", help="Target language code")
    build.add_argument("--project-id", help="Google Cloud project id")
    build.add_argument("--repeats", type=int, help="Number of repeats")
    build.add_argument("--output-dir", type=Path, help="Parent folder for sentence folders")
    build.add_argument("--silence-dir", type=Path, help="Folder with 1.ogg ... 12.ogg silence files")
    build.add_argument("--prefix", default=Config.SENTENCE_TRACK_PREFIX,
                       help="Prefix for the sentence track file name")
    build.add_argument("--words-file-name", default=Config.WORDS_TRACK_FILE_NAME,
                       help="File name of the words and definitions track")

    assemble = subparsers.add_parser("assemble", help="Assemble a staged fragment folder")
    assemble.add_argument("fragment_dir", type=Path, help="Folder of generated fragments")
    assemble.add_argument("destination", type=Path, help="Output track path")
    assemble.add_argument("--silence-dir", type=Path, help="Folder with silence files")

    return parser


def apply_overrides(args: argparse.Namespace) -> None:
    """Copy command line overrides onto Config."""
    overrides = {
        'LANGUAGE_CODE': getattr(args, 'language', None),
        'PROJECT_ID': getattr(args, 'project_id', None),
        'NUMBER_OF_REPEATS': getattr(args, 'repeats', None),
        'AUDIO_PARENT_DIR': getattr(args, 'output_dir', None),
        'SILENCE_DIR': getattr(args, 'silence_dir', None),
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(Config, name, value)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    apply_overrides(args)
    error_handler.clear_errors()

    if args.command == "build":
        english_text = args.sentence or input("Please enter the English sentence: ").strip()
        if not english_text:
            print("An English sentence is required")
            return 1
        Config.ensure_directories()
        success = build_sentence(english_text, args.prefix, args.words_file_name)
    else:
        success = assemble_directory(args.fragment_dir, args.destination)

    print_error_summary()
    if success:
        print("Tracks created successfully.")
        return 0

    print("Track build failed. Use --verbose for detailed logs.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
