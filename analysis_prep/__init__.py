"""analysis_prep

Core package namespace for the analysis pre-processor.

Why this exists
---------------
The pre-processor is split into three layers:

* ``analysis_prep`` owns the contracts: domain types (project records,
  classification results, quality profiles, the merged analysis config) and the
  filesystem layout rules (where config and rule-set files go).
* ``tools`` owns adapters for external systems (the quality-profile server).
* ``pipeline`` wires everything together into one pre-processing run.

Contracts never import ``tools`` or ``pipeline``; that keeps the dependency
direction one-way and lets both sides share the same vocabulary.
"""

from __future__ import annotations
