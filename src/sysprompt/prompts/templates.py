"""Prompt templates.

Templates are filled with ``str.format``; substituted values are not
re-parsed, so code containing braces is safe.
"""

from enum import Enum


class PromptKind(str, Enum):
    """Which prompt to build."""

    OPTIMIZE = "optimize"
    REVIEW = "review"


CODE_PLACEHOLDER = "PASTE_YOUR_CODE_HERE"

OUTPUT_FORMAT = """\
<output_format>
- Provide the fully optimized code in a single code block
- Include a summary table of changes made and their expected performance impact
- Flag any trade-offs (e.g., readability vs speed, memory vs speed)
- Note if any dependencies, compiler flags, or runtime flags are recommended for this system
- If no meaningful optimizations are possible, state that clearly
</output_format>"""

OPTIMIZE_TEMPLATE = """\
As a Senior Level Software Engineer, optimize the following code so that:
1. No existing functionality is changed - inputs and outputs must remain identical
2. It is optimized to run as fast as possible on the system described below
3. All optimizations are documented with inline comments explaining WHY each change improves performance on this specific hardware

<system_specs>
{specs}
</system_specs>

<installed_runtimes>
{runtimes}
</installed_runtimes>

<optimization_priorities>
- Leverage CPU architecture and instruction sets available on this processor
- Optimize memory usage relative to available RAM
- Use OS-specific performance APIs or features where applicable
- Prefer algorithmic improvements over micro-optimizations
- Identify and eliminate unnecessary allocations, redundant operations, or blocking calls
- Consider parallelism and concurrency if the CPU supports multiple cores/threads
- If a GPU is available and the workload suits it, suggest GPU acceleration options
- Use runtime-specific optimizations relevant to the detected language and version
</optimization_priorities>

{output_format}

<code>
{code}
</code>"""

REVIEW_TEMPLATE = """\
As a Senior Level Software Engineer, review the following code against these requirements:

<review_requirements>
1. If this is a Python file, ensure it follows PEP 8 or black formatting and the additional requirements below
2. The code should use standard design patterns where appropriate
3. The code should use configuration for configurable values where appropriate
4. The code should be optimized to run well on hardware with lower specs
5. The code must not waste resources such as unnecessary disk or memory reads/writes
6. The code must not contain any unused code
7. The code should be as idiomatic for its language as possible
8. The code should be easy to read for someone who is not an expert
9. Every recommended update needs a reason and an explanation attached to it
</review_requirements>

{output_format}

<code>
{code}
</code>"""

TEMPLATES = {
    PromptKind.OPTIMIZE: OPTIMIZE_TEMPLATE,
    PromptKind.REVIEW: REVIEW_TEMPLATE,
}
