from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from typing import Any

from rich.console import Console

console = Console()


def _to_jsonable(x: Any) -> Any:
    if is_dataclass(x) and not isinstance(x, type):
        return _to_jsonable(asdict(x))
    if hasattr(x, "model_dump"):
        return _to_jsonable(x.model_dump())
    if isinstance(x, dict):
        return {k: _to_jsonable(v) for k, v in x.items()}
    if isinstance(x, (list, tuple)):
        return [_to_jsonable(v) for v in x]
    if isinstance(x, (datetime, date)):
        return x.isoformat()
    # Big numbers exceed JSON's safe integer range.
    if isinstance(x, int) and not isinstance(x, bool) and abs(x) > 2**53:
        return str(x)
    return x


def log_event(event: str, payload: dict[str, Any]) -> None:
    console.print(f"[bold]{event}[/bold]")
    console.print_json(json.dumps({k: _to_jsonable(v) for k, v in payload.items()}, default=str))
