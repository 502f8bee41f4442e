"""buildplan: compile dev-server script configuration into an execution plan.

This package provides tools for:
- Parsing "type:match" script keys and mount/proxy commands
- Binding build, transform and bundle plugins to scripts
- Injecting the implicit dependency mount and JS/TS build scripts
- Validating declarations and ordering the final plan

The plan is immutable data; a separate build or dev-server engine executes it.

Example usage:
    >>> from buildplan.core.compiler import compile_scripts
    >>>
    >>> plan = compile_scripts({"mount:src": "mount src --to /app"})
    >>> [script.id for script in plan]
    ['mount:web_modules', 'mount:src', 'build:js,jsx,ts,tsx']
"""

__version__ = "0.1.0"
