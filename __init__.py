"""
Dota 2 Match Notifier
=====================

Polls OpenDota for a tracked player's newest match and announces it in a
Discord channel, keeping count of low priority (penalty queue) streaks.

Features:
- Clean Architecture (Domain → Infrastructure → Application → Presentation)
- Async API calls with retry and daily quota handling
- Durable streak state across restarts
- Status endpoint for liveness checks

Version: 1.0.0
"""

__version__ = "1.0.0"
