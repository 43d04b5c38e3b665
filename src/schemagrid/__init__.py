"""
schemagrid: schema-driven editable, paginated, filterable record grids.

## Layers
- schemagrid.core: zero-IO contracts for type normalization, default-field ranking,
  column compilation, custom cell types, row enrichment.
- schemagrid.grid: load orchestration (GridController), settings, service
  protocols and polars-backed in-memory reference services.
- app (separate package): Streamlit host rendering the grid.

## Examples
```python
import asyncio
from schemagrid.grid import GridController, GridSettings, CollectingNotifier
from app.demo import build_demo_services

schema, records = build_demo_services()
ctrl = GridController(schema, records, CollectingNotifier(), GridSettings())
asyncio.run(ctrl.open("Account"))
[c.field_name for c in ctrl.columns]
```
"""

from __future__ import annotations

__version__ = "0.1.0"
