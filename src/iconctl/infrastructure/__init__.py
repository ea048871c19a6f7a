"""Infrastructure layer: layer registry, filesystem discovery, resolution.

This layer may import from the domain layer. It must never import from
services, commands, or output. The service layer bridges between the
engine and the interfaces that consume it.
"""
