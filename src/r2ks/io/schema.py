"""List-file header schema using pydantic."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ListFileHeader(BaseModel):
    """Counts declared on the first line of a list file."""

    num_genes: int = Field(ge=1, description="Number of genes in every list")
    num_lists: int = Field(ge=1, description="Number of ranked lists in the file")

    @property
    def num_pairs(self) -> int:
        """Number of unordered pairs of distinct lists."""
        return self.num_lists * (self.num_lists - 1) // 2
