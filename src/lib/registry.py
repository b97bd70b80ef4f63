"""
Processor registry for docdown

Holds the ordered chain of ProcessorSpecs a document is rendered with.
Preprocessors run in ascending priority on raw Markdown, the converter
runs once, then postprocessors run in ascending priority on the HTML.
Each stage receives the output of the one before it.

Registries are plain objects: build one (with or without the built-in
processors), register extras, and hand it to a Document. Nothing is
registered globally.
"""

from typing import List, Optional

from ..models.context import ProcessingContext
from ..models.processors import ProcessorCategory, ProcessorSpec
from . import (
    accordions,
    annotations,
    badges,
    callouts,
    cards,
    codeblocks,
    codegroups,
    filetree,
    icons,
    includes,
    snippets,
    steps,
    structure,
    tabs,
    variables,
)
from .log import LOG


class ProcessorRegistrationError(TypeError):
    """Raised when something that is not a valid processor is registered"""


class ComponentRegistry:
    """
    Ordered registry of processor specifications

    Specs are kept sorted by priority; the sort is stable, so equal
    priorities run in registration order.
    """

    def __init__(self, builtins: bool = True) -> None:
        """
        Initialize the registry.

        Args:
            builtins: Register every built-in processor
        """
        self.specs: List[ProcessorSpec] = []
        if builtins:
            self.builtins_register()

    def register(self, spec: ProcessorSpec) -> None:
        """
        Register a processor specification.

        Raises:
            ProcessorRegistrationError: spec is not a ProcessorSpec, its
                priority is not an int, or a stage is not callable
        """
        if not isinstance(spec, ProcessorSpec):
            raise ProcessorRegistrationError(
                f"Expected ProcessorSpec, got {type(spec).__name__}"
            )
        if not isinstance(spec.priority, int) or isinstance(spec.priority, bool):
            raise ProcessorRegistrationError(
                f"Processor '{spec.name}' has non-integer priority {spec.priority!r}"
            )
        if not callable(spec.preprocess) or not callable(spec.postprocess):
            raise ProcessorRegistrationError(f"Processor '{spec.name}' has a non-callable stage")
        self.specs.append(spec)
        self.specs.sort(key=lambda registered: registered.priority)

    def reset(self) -> None:
        """Remove every processor, built-ins included"""
        self.specs = []

    def spec_get(self, name: str) -> Optional[ProcessorSpec]:
        """Look up a registered spec by name"""
        for spec in self.specs:
            if spec.name == name:
                return spec
        return None

    def names_list(self) -> List[str]:
        """Processor names in execution order"""
        return [spec.name for spec in self.specs]

    def preprocessors_run(self, content: str, context: ProcessingContext) -> str:
        """Apply every preprocess stage in order"""
        for spec in self.specs:
            LOG(f"preprocess: {spec.name} ({spec.priority})", level=3)
            content = spec.preprocess(content, context)
        return content

    def postprocessors_run(self, html: str, context: ProcessingContext) -> str:
        """Apply every postprocess stage in order"""
        for spec in self.specs:
            LOG(f"postprocess: {spec.name} ({spec.priority})", level=3)
            html = spec.postprocess(html, context)
        return html

    def builtins_register(self) -> None:
        """Register every built-in processor"""
        self.codeProcessors_register()
        self.blockProcessors_register()
        self.inlineProcessors_register()
        self.structureProcessors_register()

    def codeProcessors_register(self) -> None:
        """Includes, variables, snippet imports and code block features"""

        self.register(ProcessorSpec(
            name="include",
            category=ProcessorCategory.IMPORT,
            description="Replace <!--@include: path--> directives with Markdown file contents",
            priority=0,
            preprocess=includes.includes_preprocess,
            examples=("<!--@include: shared/install.md-->",),
        ))

        self.register(ProcessorSpec(
            name="variables",
            category=ProcessorCategory.IMPORT,
            description="Substitute {{ name }} from site and front matter variables",
            priority=1,
            preprocess=variables.variables_preprocess,
            examples=("Version {{ version }}", "```bash-vars\npip install pkg=={{ version }}\n```"),
        ))

        self.register(ProcessorSpec(
            name="snippet-import",
            category=ProcessorCategory.IMPORT,
            description="Replace <<< @/path directives with fenced code from the docs root",
            priority=1,
            preprocess=snippets.snippets_preprocess,
            examples=("<<< @/examples/app.js#setup", "<<< @/examples/app.py{3-9}"),
        ))

        self.register(ProcessorSpec(
            name="code-block-features",
            category=ProcessorCategory.CODE,
            description="Record fence titles, line numbers, highlights and [!code] markers",
            priority=5,
            preprocess=codeblocks.codeFeatures_preprocess,
            examples=("```js [app.js]:line-numbers {2}", "x = 1  # [!code focus]"),
        ))

        self.register(ProcessorSpec(
            name="code-annotation",
            category=ProcessorCategory.CODE,
            description="Numbered popover annotations from // (1) markers and the list after the fence",
            priority=8,
            preprocess=annotations.annotations_preprocess,
            examples=("```py\nx = 1  # (1)\n```\n\n1. Explains x",),
        ))

        self.register(ProcessorSpec(
            name="file-tree",
            category=ProcessorCategory.CODE,
            description="Render filetree fences as folder/file trees",
            priority=8,
            preprocess=filetree.fileTrees_preprocess,
            examples=("```filetree\nsrc/\n  main.py *\n```",),
        ))

        self.register(ProcessorSpec(
            name="code-block",
            category=ProcessorCategory.CODE,
            description="Finalize highlighted code blocks with header, gutter, line states and copy button",
            priority=20,
            postprocess=codeblocks.codeBlocks_postprocess,
        ))

    def blockProcessors_register(self) -> None:
        """::: container components"""

        self.register(ProcessorSpec(
            name="callout",
            category=ProcessorCategory.BLOCK,
            description="Note/tip/important/warning/danger callouts and GitHub alerts",
            priority=10,
            preprocess=callouts.callouts_preprocess,
            postprocess=callouts.githubAlerts_postprocess,
            examples=(":::warning Careful\nBody\n:::", "> [!CAUTION]\n> Body"),
        ))

        self.register(ProcessorSpec(
            name="accordion",
            category=ProcessorCategory.BLOCK,
            description="Collapsible <details> sections",
            priority=10,
            preprocess=accordions.accordions_preprocess,
            examples=(':::details{title="More" open}\nBody\n:::',),
        ))

        self.register(ProcessorSpec(
            name="steps",
            category=ProcessorCategory.BLOCK,
            description="Numbered step lists from ### headings",
            priority=10,
            preprocess=steps.steps_preprocess,
            examples=(":::steps\n### One\n### Two\n:::",),
        ))

        self.register(ProcessorSpec(
            name="cards",
            category=ProcessorCategory.BLOCK,
            description="Card grids with optional icon and link",
            priority=10,
            preprocess=cards.cards_preprocess,
            examples=(':::cards\n::card{title="Start" icon="rocket" href="/start"}\nBody\n::\n:::',),
        ))

        self.register(ProcessorSpec(
            name="code-group",
            category=ProcessorCategory.BLOCK,
            description="Tabbed group of labelled code blocks",
            priority=12,
            preprocess=codegroups.codeGroups_preprocess,
            examples=(":::code-group\n```js [a.js]\n```\n```ts [a.ts]\n```\n:::",),
        ))

        self.register(ProcessorSpec(
            name="tabs",
            category=ProcessorCategory.BLOCK,
            description="ARIA tab groups from == Label sections",
            priority=15,
            preprocess=tabs.tabs_preprocess,
            examples=(":::tabs\n== npm\nnpm i\n== yarn\nyarn add\n:::",),
        ))

    def inlineProcessors_register(self) -> None:
        """Inline substitutions on rendered HTML"""

        self.register(ProcessorSpec(
            name="badge",
            category=ProcessorCategory.INLINE,
            description="Inline :badge[text]{type=...} labels",
            priority=15,
            postprocess=badges.badges_postprocess,
            examples=(":badge[Beta]{type=warning}",),
        ))

        self.register(ProcessorSpec(
            name="icon",
            category=ProcessorCategory.INLINE,
            description="Inline :name: and :name:weight: Phosphor icons",
            priority=20,
            postprocess=icons.inlineIcons_postprocess,
            examples=(":rocket:", ":heart:fill:"),
        ))

    def structureProcessors_register(self) -> None:
        """Custom heading ids, heading anchors, table of contents and table wrapping"""

        self.register(ProcessorSpec(
            name="custom-anchor",
            category=ProcessorCategory.STRUCTURE,
            description="Set heading ids from a trailing {#id}",
            priority=25,
            postprocess=structure.customAnchors_postprocess,
            examples=("## Installation {#install}",),
        ))

        self.register(ProcessorSpec(
            name="heading-anchor",
            category=ProcessorCategory.STRUCTURE,
            description="Anchor links on h2-h6 headings",
            priority=30,
            postprocess=structure.headingAnchors_postprocess,
        ))

        self.register(ProcessorSpec(
            name="table-of-contents",
            category=ProcessorCategory.STRUCTURE,
            description="Collect h2-h4 headings into the context table of contents",
            priority=35,
            postprocess=structure.toc_postprocess,
        ))

        self.register(ProcessorSpec(
            name="table-wrapper",
            category=ProcessorCategory.STRUCTURE,
            description="Wrap tables for horizontal scrolling",
            priority=100,
            postprocess=structure.tables_postprocess,
        ))
