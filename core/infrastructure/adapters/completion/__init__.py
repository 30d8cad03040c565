"""Text-completion adapters (OpenAI chat completions)."""
from .openai_completion_client import OpenAICompletionClient

__all__ = ["OpenAICompletionClient"]
