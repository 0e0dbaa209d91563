"""Validation schema for Klondike rule configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, field_validator

from .history import DEFAULT_HISTORY_LIMIT
from .scoring import ScoreTable


class ScoringConfig(BaseModel):
    waste_to_tableau: int = Field(5, ge=0, description="Points for moving the waste card onto the tableau.")
    waste_to_foundation: int = Field(10, ge=0, description="Points for moving the waste card to a foundation.")
    tableau_to_foundation: int = Field(10, ge=0, description="Points for moving a tableau card to a foundation.")
    flip_card: int = Field(5, ge=0, description="Points for turning up a face-down tableau card.")
    recycle_stock: int = Field(-100, description="Penalty applied when the waste is turned back into the stock.")

    @field_validator("recycle_stock")
    @classmethod
    def ensure_penalty(cls, value: int) -> int:
        if value > 0:
            raise ValueError("Recycling the stock cannot award points.")
        return value


class RuleSet(BaseModel):
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    history_limit: int = Field(DEFAULT_HISTORY_LIMIT, ge=1, description="Number of undo steps kept.")

    def score_table(self) -> ScoreTable:
        return ScoreTable(**self.scoring.model_dump())


def load_rules(path: Union[str, Path]) -> RuleSet:
    with open(path, encoding="utf-8") as handle:
        payload = json.load(handle)
    return RuleSet.model_validate(payload)
