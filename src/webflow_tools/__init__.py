"""
webflow-tools - Webflow Data API tools for LLM agents.

Each Webflow operation is exposed as a tool with a typed contract that an
orchestrator can discover, validate arguments against and invoke:
- Typed input and output shapes (Pydantic)
- Normalized results from an inconsistent upstream wire format
- An approval flag on every tool that changes the live site
- A single-step register-and-apply workflow for custom scripts

Example usage:
    $ webflow-tools tools
    $ webflow-tools invoke list_pages --arg limit=10
    $ webflow-tools describe add_custom_code
"""

__version__ = "0.1.0"
__author__ = "webflow-tools Contributors"

__all__ = [
    "__version__",
    "__author__",
]
