"""
Correlation logic for identifying related incident events on topologically connected components, scored by temporal proximity, hop distance, severity and event type.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.correlation.pairs import CorrelationResult, correlate, pair_key, summarize
from engine.correlation.scoring import CorrelationWeights

__all__ = ["CorrelationResult", "CorrelationWeights", "correlate", "pair_key", "summarize"]
