from typing import List, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt, field_validator

# JSON strings and booleans are rejected, not coerced.
Number = Union[StrictInt, StrictFloat]


class CacheStats(BaseModel):
    """Lookup counters collected by a single cache cell."""

    hits: int = Field(default=0, ge=0, description="Solves answered from the cached inverse.")
    misses: int = Field(default=0, ge=0, description="Solves that had to compute the inverse.")
    failures: int = Field(
        default=0,
        ge=0,
        description="Misses whose inversion failed because the matrix was not invertible.",
    )
    invalidations: int = Field(
        default=0, ge=0, description="Number of times the matrix was replaced."
    )

    @property
    def lookups(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Fraction of lookups served from cache, ``0.0`` before the first lookup."""
        if not self.lookups:
            return 0.0
        return self.hits / self.lookups


class MatrixFile(BaseModel):
    """JSON payload accepted by the command-line entry point."""

    rows: List[List[Number]] = Field(
        description="Matrix rows, each a list of numbers of identical length."
    )

    @field_validator("rows")
    @classmethod
    def _rows_are_rectangular(cls, rows: List[List[Number]]) -> List[List[Number]]:
        if not rows or not rows[0]:
            raise ValueError("matrix must have at least one row and one column")
        width = len(rows[0])
        for idx, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(
                    f"row {idx} has {len(row)} entries, expected {width}"
                )
        return rows
