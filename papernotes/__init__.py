"""
paper-notes — turn a research-paper PDF into structured notes.

Downloads a PDF, optionally strips pages (pypdf), extracts text through the
Unstructured partition API, and asks an OpenAI-compatible chat model to fill
in a fixed notes schema via function calling.
"""

__version__ = "0.1.0"
