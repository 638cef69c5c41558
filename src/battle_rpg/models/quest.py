from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class QuestStatus(str, Enum):
    AVAILABLE = "available"
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


class QuestObjective(BaseModel):
    description: str = ""
    target_name: str
    required_count: int = Field(default=1, ge=1)
    current_count: int = Field(default=0, ge=0)

    @property
    def is_complete(self) -> bool:
        return self.current_count >= self.required_count


class Quest(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    description: str = ""
    status: QuestStatus = QuestStatus.ACTIVE
    objectives: list[QuestObjective] = Field(default_factory=list)
    exp_reward: int = Field(default=0, ge=0)
    gold_reward: int = Field(default=0, ge=0)
    level_requirement: int = 1
    rewards_claimed: bool = False

    def is_complete(self) -> bool:
        return bool(self.objectives) and all(o.is_complete for o in self.objectives)
