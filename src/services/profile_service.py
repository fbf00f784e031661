"""Narrative pilot profiles generated by a chat-completion model.

The model only sees a deterministic prompt built from killboard stats and the
recently flown ships. Without an ``OPENAI_API_KEY`` the feature is disabled
and every profile is None.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from openai import AsyncOpenAI, OpenAIError

from models.eve import ShipUsageEntry
from models.zkill import KillboardStats
from utils.exceptions import ProfileGenerationError
from utils.formatting import format_stat

if TYPE_CHECKING:
    from utils.config import OpenAIConfig

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 150

REGIONS = (
    ("Highsec", "highsec"),
    ("Lowsec", "lowsec"),
    ("Nullsec", "nullsec"),
    ("Wormhole", "wormhole"),
)


def build_profile_prompt(
    stats: KillboardStats | None, recent_ships: list[ShipUsageEntry]
) -> str:
    """Build the pilot profile prompt.

    Absent combat stats read "N/A"; absent activity shares read 0%.
    """
    stats = stats or KillboardStats()

    lines = [
        "Create a concise pilot profile based on the following EVE Online "
        "player statistics:",
        "",
        "Combat Statistics:",
        f"- Danger Ratio: {format_stat(stats.danger_ratio)}",
        f"- Gang Ratio: {format_stat(stats.gang_ratio)}",
        f"- Ships Destroyed: {format_stat(stats.ships_destroyed)}",
        f"- Ships Lost: {format_stat(stats.ships_lost)}",
        "",
        "Activity Areas:",
    ]
    for label, region in REGIONS:
        ratio = stats.region_ratio(region)
        lines.append(f"- {label} Activity: {format_stat(ratio or 0)}%")

    lines.extend(["", "Recently Used Ships:"])
    lines.extend(f"- {ship.ship_name}" for ship in recent_ships)

    lines.extend(
        [
            "",
            "Please provide a profile in the following format:",
            "Pilot Type: (Single word or short phrase describing their primary "
            "activity: Miner, Ganker, PvPer, etc.)",
            "Summary: (2-3 sentences describing their playstyle, preferred space "
            "type, and notable patterns)",
        ]
    )
    return "\n".join(lines)


class ProfileService:
    """Generates a short narrative profile per character."""

    def __init__(
        self,
        client: Any | None,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        """Initialize profile service.

        Args:
            client: An ``AsyncOpenAI``-compatible client, or None to disable
            model: Chat-completion model name
            temperature: Sampling temperature
            max_tokens: Cap on generated tokens
        """
        self._client = client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_config(cls, config: OpenAIConfig) -> ProfileService:
        """Build the service from settings; no key means no client."""
        client = None
        if config.api_key is not None:
            client = AsyncOpenAI(api_key=config.api_key.get_secret_value())
        return cls(
            client,
            model=config.model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def _complete(self, prompt: str) -> str | None:
        """Send one prompt and return the first choice's text.

        Raises:
            ProfileGenerationError: If the chat-completion call fails
        """
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            raise ProfileGenerationError(f"Chat completion failed: {e}") from e

        if not response.choices:
            return None
        content = response.choices[0].message.content
        return content.strip() if content and content.strip() else None

    async def generate(
        self, stats: KillboardStats | None, recent_ships: list[ShipUsageEntry]
    ) -> str | None:
        """Generate a pilot profile.

        Returns:
            The first completion's text, or None if the feature is disabled,
            the call fails or the model returns nothing
        """
        if self._client is None:
            logger.warning("OpenAI API key is not configured; skipping pilot profile")
            return None

        try:
            return await self._complete(build_profile_prompt(stats, recent_ships))
        except ProfileGenerationError as e:
            logger.error("Error generating pilot profile: %s", e)
            return None

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
