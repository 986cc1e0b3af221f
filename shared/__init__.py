"""
Shared Kernel

Domain base classes, value objects and the in-process message bus used by
the billboards app.
"""
