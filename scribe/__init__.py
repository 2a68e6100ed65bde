"""
SCRIBE - Structured Content to Rendered, Index-Bound, Escaped documents

A resume builder back end that serializes structured resume data into typeset
markup (LaTeX or Typst) and compiles it to PDF through an external engine.

Architecture:
- Editing Context: Resume data model, validation, and immutable edits
- Templating Context: Escaping, section rendering, and template assembly
- Rendering Context: PDF compilation, result caching, and render sessions
"""

__version__ = "0.1.0"
