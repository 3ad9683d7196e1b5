# This file is part of RQMap.
# Licensed under MIT License.

"""CLI subcommand listing the registered filters and transforms."""


def list_hooks(args):
    """List all installed read filters and locus transforms."""
    from ..plugins.registry import HookRegistry

    registry = HookRegistry().discover()
    filters, transforms = registry.list_available()

    for title, hooks in (('Filters:', filters), ('Transforms:', transforms)):
        print(title)
        if not hooks:
            print('  (none)')
        for name, info in sorted(hooks.items()):
            tag = ' (built-in)' if info.get('builtin') else ''
            print(f"  {name:20s} {info.get('description', '')}{tag}")
        print()
