"""pipeask — send a prompt and piped text to a chat model from the shell."""

__version__ = "0.1.0"

from pipeask._config import Settings  # noqa: E402
from pipeask.llm import Client, Response  # noqa: E402

__all__ = ["Client", "Response", "Settings", "__version__"]
