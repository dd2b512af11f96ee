"""
Adapters Layer
==============

Concrete implementations of the ports for specific technologies.

Inbound Adapters:
- FastAPI routes (in api/ layer)

Outbound Adapters:
- MongoDB document store
- Neo4j graph store
"""
