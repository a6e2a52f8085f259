"""
SkyGuard
========

Decentralized drone-swarm defense simulation.

Friendly interceptors and bombers defend ground assets against a hostile
swarm under configurable communication, jamming and formation policies.

Packages:
    - comms: EventBus for effects, casualty and statistics events
    - units: interceptor / bomber type definitions and combat profiles
    - simulation: threat assessment, formations, combat, tick engine
"""

__version__ = "1.2.4"
