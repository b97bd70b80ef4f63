#!/usr/bin/env python3
"""
docdown - Markdown documentation-site compiler

Turns a tree of Markdown pages into a static HTML site. Plain Markdown is
extended with documentation components: callouts, tabs, code groups,
accordions, cards, steps, badges and icons, plus rich code blocks with
titles, line numbers, highlighted lines and diff/focus/error/warning
markers and numbered annotations, file trees, snippet imports from source
files, Markdown includes and {{ name }} variables.

This codebase uses the ChRIS "plugin" pattern as a general purpose app
development framework.

Usage:
    docdown inputdir/ outputdir/ [--docsDir docs] [--siteTitle "My Project"]
                                  [--variables variables.yml]

Examples:
    # Build the docs/ tree of a project into site/
    docdown . site/ --docsDir docs

    # Verbose output
    docdown . site/ --docsDir docs -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

import yaml
from chris_plugin import chris_plugin
from .lib import SiteBuilder, __version__, LOG, state_connectToLogger, variables_load
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
  docdown
  =======
  Markdown documentation-site compiler
"""

parser = ArgumentParser(
    description="docdown - Markdown documentation-site compiler with component extensions",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--docsDir",
    default=".",
    type=str,
    help="Directory holding the Markdown pages (relative to inputdir)",
)

parser.add_argument(
    "--siteTitle",
    default=None,
    type=str,
    help="Site title shown in every page (defaults to DOCDOWN_SITE_TITLE)",
)

parser.add_argument(
    "--variables",
    default=None,
    type=str,
    help="YAML file of {{ name }} values shared by every page (relative to inputdir)",
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the generated site",
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
    Validate environment and resolve the docs and output directories.

    Returns:
        ProgramState with added fields:
            - docsSourceDir: Resolved docs directory
            - siteVariables: Values from the --variables file, if given
            - htmlOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if the docs directory or the variables file is missing
    """
    state = inputstate.copy()
    state_connectToLogger(state)

    LOG(DISPLAY_TITLE, level=2)
    LOG("Checking environment...", level=2)

    docs_dir = state.inputdir / state.docsDir
    if not docs_dir.is_dir():
        print(f"Error: Docs directory not found: {docs_dir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.docsSourceDir = docs_dir
    LOG(f"Docs directory: {docs_dir}", level=2)

    if state.variables:
        variables_file = state.inputdir / state.variables
        try:
            state.siteVariables = variables_load(variables_file)
        except (OSError, yaml.YAMLError) as e:
            print(f"Error: Cannot read variables file {variables_file}: {e}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        LOG(f"Loaded {len(state.siteVariables)} site variables", level=2)

    state.htmlOutputdir = state.outputdir / state.outputSubdir
    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def docs_collect(inputstate: ProgramState) -> ProgramState:
    """
    Find the Markdown pages to render.

    Returns:
        ProgramState with added field:
            - sourceFiles: Markdown files below docsSourceDir

    Exits:
        1 if no Markdown page is found
    """
    state = inputstate.copy()
    state_connectToLogger(state)

    LOG("Collecting pages...", level=1)
    state.sourceFiles = SiteBuilder(
        docs_dir=str(state.docsSourceDir), output_dir=str(state.htmlOutputdir)
    ).sources_collect()

    if not state.sourceFiles:
        print(f"Error: No Markdown pages found in {state.docsSourceDir}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Found {len(state.sourceFiles)} pages", level=2)
    return state


def site_build(inputstate: ProgramState) -> ProgramState:
    """
    Render every page and write the site.

    Returns:
        ProgramState with added field:
            - buildResult: Dict containing:
                - status: bool (build success)
                - output_dir: str (site root)
                - page_count: int (pages written)
                - pages: list of written page paths

    Exits:
        1 if the build fails
    """
    state = inputstate.copy()
    state_connectToLogger(state)

    LOG("Building site...", level=1)
    try:
        builder = SiteBuilder(
            docs_dir=str(state.docsSourceDir),
            output_dir=str(state.htmlOutputdir),
            site_title=state.siteTitle,
            variables=state.siteVariables,
        )
        state.buildResult = builder.build()
        LOG(f"Build complete: {state.buildResult['page_count']} pages", level=2)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Build error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display build results to the user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if buildResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.buildResult:
        print("Error: Build failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Build successful!", level=1)
    LOG(f"  Output: {state.buildResult['output_dir']}", level=1)
    LOG(f"  Pages: {state.buildResult['page_count']}", level=1)
    LOG("\nTo view:", level=1)
    LOG(f"  cd {state.htmlOutputdir}", level=1)
    LOG("  python3 -m http.server 8000", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="docdown - Markdown documentation-site compiler",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - build a documentation site from a Markdown tree.

    Orchestrates the full build pipeline:
        1. env_check: Validate paths and environment
        2. docs_collect: Find Markdown pages
        3. site_build: Render pages, copy assets, write stylesheet
        4. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, docs_collect, site_build, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
