"""Configuration management for the tableau pipeline."""

from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .models import DEFAULT_SEED

ConstraintName = Literal[
    "ident",
    "dep",
    "onset",
    "son_seq_pr",
    "syllabify",
    "max",
    "max_initial_v",
    "max_final_v",
]


class ConstraintConfig(BaseModel):
    """Configuration for one constraint in the ranked set."""

    name: ConstraintName
    rank: int = Field(default=1, ge=0)
    enabled: bool = True


def default_constraints() -> List[ConstraintConfig]:
    """All constraints, ranked in declaration order."""
    names = ["max", "max_initial_v", "max_final_v", "dep", "ident", "onset", "syllabify", "son_seq_pr"]
    return [ConstraintConfig(name=name, rank=i + 1) for i, name in enumerate(names)]


class GenerationConfig(BaseModel):
    """Configuration for candidate generation."""

    seed: int = Field(default=DEFAULT_SEED, ge=0)
    max_deletions: Optional[int] = Field(
        default=None,
        ge=0,
        description="Cap on segments deleted per competitor (None = all subsets)",
    )


class InputConfig(BaseModel):
    """Configuration for underlying forms."""

    forms: List[str] = Field(default_factory=list)
    input_file: Optional[Path] = None  # .txt, .csv or .json
    input_column: str = "form"  # CSV column holding the forms

    @field_validator("input_file", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string to Path."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v


class OutputConfig(BaseModel):
    """Configuration for output options."""

    output_path: Path = Path("output/tableau.csv")
    format: Literal["csv", "parquet", "json"] = "csv"
    include_parse: bool = True  # Add the syllable_parse column

    @field_validator("output_path", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string to Path."""
        return Path(v) if isinstance(v, str) else v


class Config(BaseModel):
    """Main configuration for the tableau pipeline."""

    input: InputConfig = Field(default_factory=InputConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    constraints: List[ConstraintConfig] = Field(default_factory=default_constraints)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("constraints")
    @classmethod
    def check_unique_names(cls, v):
        """Each constraint may appear only once."""
        names = [c.name for c in v]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate constraints: {', '.join(duplicates)}")
        return v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        # mode="json" turns Path objects into strings
        data = self.model_dump(mode="json")
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True)
