"""
map_picker.reporting: terminal formatting and flat-file export.

Modules:
  formatters : text formatters for Typer CLI commands (optional colour).
  export     : CSV export helper.
"""
