"""
Text Actions - prompt-driven text transformations over any local or hosted LLM

Pick an action (proofread, translate, summarize...) -> send text -> get the cleaned result.
Works with Ollama, LM Studio, llama.cpp and any OpenAI-compatible endpoint.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("text-actions")
except PackageNotFoundError:
    __version__ = "0.0.0"  # Not installed

from .actions import ActionRequest
from .service import ActionService
from .app import TextActions

__all__ = ["ActionRequest", "ActionService", "TextActions", "__version__"]
