"""Data anchor: plain Python structures that hold all process-wide state.

Handles and the no-callback registry live here rather than on the classes
that use them, so behavior modules stay free of module-level mutable state.
"""

import threading

# Handle table: one DynamicProperty per name for the process lifetime
handles: dict[str, object] = {}
handles_lock = threading.Lock()

# Callback-avoidance registry: id(cls) -> cls (value pins the id)
# Never mutated in place; writers publish a fresh dict.
no_callback_types: dict[int, type] = {}
registry_lock = threading.Lock()
registry_initialized: bool = False

# Unregistered classes already warned about for not overriding the hook
warned_types: set[type] = set()
warned_lock = threading.Lock()
