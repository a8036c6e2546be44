from __future__ import annotations

from typing import Protocol

from bestsellers.domain.filters import FilterSet
from bestsellers.services.nyt.types import UpstreamError, UpstreamResult


class BestSellersSource(Protocol):
    name: str

    def get_history(self, filters: FilterSet) -> UpstreamResult | UpstreamError: ...
