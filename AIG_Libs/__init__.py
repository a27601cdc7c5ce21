"""
AIG_Libs - App Icon Generator Library Modules

This package contains core functionality for the App Icon Generator,
organized into specialized sub-packages:

- ImageEditingLib: Exact-size rendering, colour filters, compositing and the edit pipeline
- ExportLib: Platform size tables, icon export engine and manifest generation
- SessionLib: Editing session state and persisted user preferences
"""

__version__ = "0.1.0"
