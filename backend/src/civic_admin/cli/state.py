from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class FetchState:
    task: Optional[asyncio.Task[Any]] = None
    status_task: Optional[asyncio.Task[Any]] = None


@dataclass
class TableState:
    """Report ids currently shown in the table, in row order."""
    row_ids: List[str] = field(default_factory=list)
    selected_report_id: Optional[str] = None
