"""Core separator, lookup, segment and envelope modules.

WHY: The core package holds the dialect-agnostic heart of the encoder:
separator contexts, tree lookup, the generic segment encoder and the
envelope driver. Dialect modules and outer layers build on these.

HOW: separators.py defines dialect defaults and the SeparatorContext,
tree.py finds nodes by tag, segments.py encodes one segment node,
envelope.py runs the ordered envelope steps.

RULES:
- No file or network I/O in this package
- Nothing here mutates the input tree
"""
