"""Core modules for buildplan.

This package contains the plan compiler:
- compiler: Script key parsing, mount/proxy argument extraction, plugin
  binding, default injection, validation and priority ordering
"""
