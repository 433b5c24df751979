from blessing_api.providers.base import OpenAIFormatProvider


class DeepSeekProvider(OpenAIFormatProvider):
    """DeepSeek provider (OpenAI-compatible chat completions)."""

    name = "deepseek"
    base_url = "https://api.deepseek.com/v1"
