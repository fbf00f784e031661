"""EVE Online killmail data models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class EveKillmailVictim(BaseModel):
    """The losing side of a killmail."""

    model_config = ConfigDict(extra="ignore")

    character_id: int | None = Field(
        None, description="Absent for structures and NPC losses"
    )
    corporation_id: int | None = None
    alliance_id: int | None = None
    ship_type_id: int | None = Field(None, description="Type of the destroyed ship")


class EveKillmailAttacker(BaseModel):
    """One participant on the winning side of a killmail."""

    model_config = ConfigDict(extra="ignore")

    character_id: int | None = Field(None, description="Absent for NPC attackers")
    corporation_id: int | None = None
    alliance_id: int | None = None
    ship_type_id: int | None = Field(None, description="Ship flown, if known")
    final_blow: bool = False


class EveKillmail(BaseModel):
    """Full killmail detail from ESI ``/killmails/{killmail_id}/{hash}/``."""

    model_config = ConfigDict(extra="ignore")

    killmail_id: int
    killmail_time: datetime | None = None
    solar_system_id: int | None = None
    victim: EveKillmailVictim
    attackers: list[EveKillmailAttacker] = Field(default_factory=list)

    def attacker_for(self, character_id: int) -> EveKillmailAttacker | None:
        """Return the attacker entry of ``character_id``, if it took part."""
        for attacker in self.attackers:
            if attacker.character_id == character_id:
                return attacker
        return None
