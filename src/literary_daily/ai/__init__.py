# ABOUTME: AI integration module for the SiliconFlow chat-completion endpoint.
# ABOUTME: Provides the generation client and the daily content orchestrator.

from literary_daily.ai.orchestrator import generate_daily_content
from literary_daily.ai.service import GenerationClient

__all__ = ["GenerationClient", "generate_daily_content"]
