"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable, Tuple
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the preprocessing pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, pattern, definition
        - env_check: fileMap, envOK
        - source_preprocess: preprocessResults
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing source files
        outputdir: Base output directory for preprocessed files
        verbosity: Logging verbosity level (1-3)
        inputFile: Optional single input filename (relative to inputdir)
        pattern: Glob selecting input files when inputFile is not given
        definition: Predefined tags from repeated -D/--definition options
        envOK: Environment validation passed
        fileMap: (input path, output path) pairs to preprocess
        preprocessResults: One result dict per processed file
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: Optional[str] = field(default=None)
    pattern: str = field(default="**/*")
    definition: List[str] = field(default_factory=list)

    # Pipeline state
    envOK: bool = field(default=False)
    fileMap: List[Tuple[Path, Path]] = field(default_factory=list)
    preprocessResults: Optional[List[Dict[str, Any]]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Merges CLI options with explicitly provided directories to create
        the initial program state for the pipeline.

        Args:
            options: Parsed CLI arguments (definition, inputFile, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for preprocessed output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Keep only options that map onto ProgramState fields
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        # argparse leaves an append action at None when the option is never given
        if filtered_options.get("definition") is None:
            filtered_options["definition"] = []

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_preprocess,
            results_report
        )

    This is equivalent to:
        results_report(source_preprocess(env_check(initial_state)))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
