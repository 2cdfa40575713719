"""
neogrove - Editor plugin helper for grove

Bridges the editor plugin to the external tooling by:
- Delegating chat, plan and model commands to `flow`
- Appending selected text and questions to markdown notes
- Resolving absolute file paths to short workspace aliases
- Reporting extended git status as JSON
"""

__version__ = "0.1.0"
