#!/usr/bin/env python3
"""
stpp - Simple tag preprocessor

Filters text files through conditional blocks driven by a set of tags:

    #if linux && !minimal
    full linux build
    #elif windows
    windows build
    #else
    generic build
    #endif

Tags are opaque flags: they are either defined or not. Conditions combine
them with !, &&, || and ^ and parentheses; there is no operator precedence
and binary operators fold to the right (a && b || c means a && (b || c)).

As an aside, this codebase uses the ChRIS "plugin" concept/pattern as a
general purpose python app development framework: every file selected in
inputdir is preprocessed, with a fresh set of tags, into the same relative
path under outputdir.

Usage:
    stpp inputdir/ outputdir/ [-D TAG ...] [--inputFile FILE] [--pattern GLOB]

Examples:
    # Preprocess every file in src/ into build/ with two tags defined
    stpp src/ build/ -D linux -D debug

    # Filter a pipe
    cat config.h.in | stpp . out/ --inputFile - -D release > config.h

    # Preprocess a single file
    stpp . out/ --inputFile config.h.in -D release

    # Only template files, with directive tracing
    stpp src/ build/ --pattern '**/*.in' -vvv
"""

import io
import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import preprocess, __version__, LOG, state_connectToLogger
from .models import ProgramState, PreprocessError, pipeline


DISPLAY_TITLE = r"""
      _
  ___| |_ _ __  _ __
 / __| __| '_ \| '_ \
 \__ \ |_| |_) | |_) |
 |___/\__| .__/| .__/
         |_|   |_|

  Simple tag preprocessor
"""

# --inputFile values that stream stdin to stdout instead of using the directories
STDIO_NAMES = ("-", "--")

# Define CLI arguments
parser = ArgumentParser(
    description="stpp - Streaming preprocessor with tag-based conditional blocks",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "-D",
    "--definition",
    action="append",
    default=None,
    metavar="TAG",
    help="Define a tag before processing (can be repeated)",
)

parser.add_argument(
    "--inputFile",
    default=None,
    type=str,
    help="Single input file (relative to inputdir). Overrides --pattern. '-' reads stdin and writes stdout",
)

parser.add_argument(
    "--pattern",
    default="**/*",
    type=str,
    help="Glob (relative to inputdir) selecting the files to preprocess",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and map input files to output files.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - fileMap: (input file, output file) pairs
            - envOK: True if environment is valid

    Exits:
        1 if the input file is missing or no input files match
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.inputFile in STDIO_NAMES:
        LOG("Streaming stdin to stdout", level=2)
        state.fileMap = []
        state.envOK = True
        return state

    if state.inputFile:
        input_file = state.inputdir / state.inputFile
        if not input_file.is_file():
            print(f"Error: Input file not found: {input_file}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        input_files = [input_file]
    else:
        input_files = sorted(p for p in state.inputdir.glob(state.pattern) if p.is_file())

    if not input_files:
        print(f"Error: No input files match '{state.pattern}' in {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.fileMap = [
        (input_file, state.outputdir / input_file.relative_to(state.inputdir))
        for input_file in input_files
    ]
    LOG(f"Selected {len(state.fileMap)} input file(s)", level=2)
    LOG(f"Predefined tags: {', '.join(state.definition) or '(none)'}", level=2)

    state.envOK = True
    return state


def source_preprocess(inputstate: ProgramState) -> ProgramState:
    """
    Preprocess every mapped input file into its output file.

    Each file is an independent run: the tag context is reseeded from the
    predefined tags, so #define/#undef in one file never leak into another.

    Args:
        inputstate: Program state with fileMap populated

    Returns:
        ProgramState with added field:
            - preprocessResults: List of result dicts, one per file, each with
              input_file and output_file added to the Preprocessor result

    Exits:
        1 on the first file that fails to read, write, or preprocess
    """

    state = inputstate.copy()
    results = []

    LOG("Preprocessing sources...", level=1)

    if state.inputFile in STDIO_NAMES:
        result = stream_preprocess(state)
        result["input_file"] = "<stdin>"
        result["output_file"] = "<stdout>"
        state.preprocessResults = [result]
        return state

    for input_file, output_file in state.fileMap:
        LOG(f"{input_file} -> {output_file}", level=2)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(
                input_file, encoding=appsettings.encoding, errors=appsettings.encoding_errors
            ) as instream, open(
                output_file, "w", encoding=appsettings.encoding, errors=appsettings.encoding_errors
            ) as outstream:
                result = preprocess(instream, outstream, tags=state.definition)
        except PreprocessError as e:
            print(f"Preprocess error in {input_file}: {e}", file=sys.stderr)
            sys.exit(1)
        except (OSError, UnicodeError) as e:
            print(f"Error processing {input_file}: {e}", file=sys.stderr)
            sys.exit(1)

        result["input_file"] = str(input_file)
        result["output_file"] = str(output_file)
        results.append(result)
        LOG(f"{result['directives']} directives, {len(result['warnings'])} warnings", level=2)

    state.preprocessResults = results
    return state


def stream_preprocess(state: ProgramState) -> dict:
    """
    Preprocess standard input to standard output.

    Both streams are rewrapped with the configured encoding and error
    handler so undecodable bytes pass through as they do for files.

    Exits:
        1 if preprocessing or decoding fails
    """
    sys.stdout.flush()
    instream = io.TextIOWrapper(
        sys.stdin.buffer, encoding=appsettings.encoding, errors=appsettings.encoding_errors
    )
    outstream = io.TextIOWrapper(
        sys.stdout.buffer, encoding=appsettings.encoding, errors=appsettings.encoding_errors
    )
    try:
        return preprocess(instream, outstream, tags=state.definition)
    except PreprocessError as e:
        print(f"Preprocess error in <stdin>: {e}", file=sys.stderr)
        sys.exit(1)
    except UnicodeError as e:
        print(f"Error processing <stdin>: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        outstream.flush()
        instream.detach()
        outstream.detach()


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display a summary of the run.

    Args:
        inputstate: Program state with preprocessResults populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if preprocessResults is None
    """
    state: ProgramState = inputstate.copy()
    if state.preprocessResults is None:
        print("Error: Preprocessing failed", file=sys.stderr)
        sys.exit(1)

    warning_count = sum(len(r["warnings"]) for r in state.preprocessResults)
    LOG("\n✓ Preprocessing successful!", level=1)
    LOG(f"  Files:    {len(state.preprocessResults)}", level=1)
    LOG(f"  Warnings: {warning_count}", level=1)
    LOG(f"  Output:   {state.outputdir}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="stpp - Simple tag preprocessor",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - preprocess files from inputdir into outputdir.

    Orchestrates the pipeline:
        1. env_check: Validate paths and select input files
        2. source_preprocess: Preprocess each file
        3. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_preprocess, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
