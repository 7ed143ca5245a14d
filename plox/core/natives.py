"""Native functions available to every plox program through the global environment."""

import time

from plox.core.callables import NativeFunction


def clock():
    """Seconds since the epoch, as a plox number."""
    return float(time.time())


NATIVES = [
    NativeFunction("clock", 0, clock),
]


def install(environment):
    """Defines every native function in environment (normally the global one)."""
    for native in NATIVES:
        environment.define(native.name, native)
