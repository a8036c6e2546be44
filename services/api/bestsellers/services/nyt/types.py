from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

UNKNOWN_ERROR = "Unknown error"


@dataclass(frozen=True)
class UpstreamResult:
    """A successful best-sellers history response, body kept as received."""

    payload: dict[str, Any]

    @property
    def status(self) -> str | None:
        return self.payload.get("status")

    @property
    def copyright(self) -> str | None:
        return self.payload.get("copyright")

    @property
    def num_results(self) -> int | None:
        return self.payload.get("num_results")

    @property
    def results(self) -> list[Any]:
        return list(self.payload.get("results") or [])


@dataclass(frozen=True)
class UpstreamError:
    """The NYT call failed. Returned, never raised."""

    message: str = UNKNOWN_ERROR
    status_code: int = 500
    kind: Literal["upstream"] = field(default="upstream", init=False)
