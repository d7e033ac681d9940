"""datamap.core — Foundation layer.

Contains the range and palette types, template text operations, resource
loading, export and the report builder.
This module has NO dependencies on datamap.policies or datamap.registry.
Only stdlib, numpy, PyYAML, PIL and cairosvg are allowed here.
"""
