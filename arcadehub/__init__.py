"""
Arcade Hub - Deterministic single-player game engines

Six classic arcade games implemented as pure, replayable state machines
behind a shared shell:
- Engine contract (commands, results, reducer)
- Board and physics primitives
- Tick driver that reports final scores exactly once
- High-score store and HTTP API
"""

__version__ = "0.1.0"
