"""
Mutation testing configuration for mutmut.

Mutates the engine modules under src/datatransform and skips low-value
mutations (logging, docstrings, package exports).
"""

SKIPPED_PREFIXES = ("logger.", "logging.", "span.set_attribute(")


def pre_mutation(context):
    """
    Hook called before each mutation.

    Skips tests, package exports, and the ambient utils package.
    """
    if "tests/" in context.filename:
        context.skip = True

    if context.filename.endswith("__init__.py"):
        context.skip = True

    if "datatransform/utils/" in context.filename:
        context.skip = True

    line = context.current_source_line.strip()
    if line.startswith(SKIPPED_PREFIXES):
        context.skip = True

    if '"""' in line or "'''" in line:
        context.skip = True
