"""Auto-discovery of range allocation policies.

Every .py file in this package that defines a `policy` object is
auto-registered by datamap.registry.discover().
"""
