"""Dispatcher chat assistant."""

from agent_framework import ChatAgent
from agent_framework.openai import OpenAIChatClient
from openai import AsyncOpenAI

from fleet_eta.config import Settings, settings as default_settings

from .tools import eta_lookup


SYSTEM_INSTRUCTIONS = """You are a trucking dispatch assistant.

## Process
1. Call `eta_lookup` with the user's request text.
2. For several stops, pass them in order as `destinations`.

## Output
For each stop: destination, distance in miles, drive time, ETA (convert UTC to the
user's timezone only if they give one).
End with the full route link (from the tool only).
If the tool returns an error, repeat its detail to the user as is.
"""


def create_eta_assistant(
    github_token: str | None = None,
    model_id: str | None = None,
    use_ollama: bool = False,
    settings: Settings | None = None,
) -> ChatAgent:
    """
    Create and configure the ETA assistant.

    Args:
        github_token: GitHub personal access token for model access.
                     Falls back to the GITHUB_TOKEN setting.
        model_id: Model to use. Falls back to MODEL_ID or a per-backend default
        use_ollama: If True, use local Ollama instead of GitHub Models.
                   Can also be set via USE_OLLAMA=true.
        settings: Settings to read fallbacks from

    Returns:
        Configured ChatAgent instance
    """
    settings = settings or default_settings
    use_ollama = use_ollama or settings.use_ollama

    if use_ollama:
        model = model_id or settings.model_id or "qwen2.5:7b"
        openai_client = AsyncOpenAI(
            base_url=settings.ollama_url,
            api_key="ollama",  # Ollama doesn't need a real key
        )
    else:
        token = github_token or settings.github_token
        if not token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable "
                "or pass github_token parameter."
            )
        model = model_id or settings.model_id or "openai/gpt-4.1"
        openai_client = AsyncOpenAI(
            base_url="https://models.github.ai/inference",
            api_key=token,
        )

    chat_client = OpenAIChatClient(
        async_client=openai_client,
        model_id=model,
    )

    return ChatAgent(
        chat_client=chat_client,
        name="EtaAssistant",
        instructions=SYSTEM_INSTRUCTIONS,
        tools=[eta_lookup],
    )
