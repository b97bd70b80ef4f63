"""
Build state and pipeline helper

ProgramState carries the CLI options and every stage result of a site
build; pipeline() threads it through the build stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field, fields
from functools import reduce


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the site build pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, docsDir, siteTitle, variables,
          outputSubdir
        - env_check: docsSourceDir, siteVariables, htmlOutputdir, envOK
        - docs_collect: sourceFiles
        - site_build: buildResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the docs tree
        outputdir: Base output directory for the generated site
        verbosity: Logging verbosity level (1-3)
        docsDir: Docs directory relative to inputdir
        siteTitle: Optional site title override
        variables: Optional YAML file of site variables, relative to inputdir
        outputSubdir: Subdirectory within outputdir for output
        envOK: Environment validation passed
        docsSourceDir: Resolved docs directory
        siteVariables: Site-wide {{ name }} values
        htmlOutputdir: Final output directory (outputdir + outputSubdir)
        sourceFiles: Markdown pages found under docsSourceDir
        buildResult: Build results (status, output_dir, page_count, pages)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    docsDir: str = field(default=".")
    siteTitle: Optional[str] = field(default=None)
    variables: Optional[str] = field(default=None)
    outputSubdir: str = field(default=".")

    # Pipeline state
    envOK: bool = field(default=False)
    docsSourceDir: Path = field(default=Path("/"))
    siteVariables: Dict[str, Any] = field(default_factory=dict)
    htmlOutputdir: Path = field(default=Path("/"))
    sourceFiles: List[Path] = field(default_factory=list)
    buildResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Options without a matching field are ignored.

        Args:
            options: Parsed CLI arguments
            inputdir: Directory containing the docs tree
            outputdir: Directory for the generated site

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        valid_fields = {f.name for f in fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        return cls(**{**filtered_options, "inputdir": inputdir, "outputdir": outputdir})

    def copy(self: PS) -> PS:
        """
        Shallow copy, so a stage never mutates the state it was given.
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
            docs_collect,
            site_build,
            results_report
        )

    This is equivalent to:
        results_report(site_build(docs_collect(env_check(initial_state))))
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
