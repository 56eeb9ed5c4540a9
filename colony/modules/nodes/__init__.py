"""
Nodes Module - Black Box Interface

Purpose: Node configuration model and registry loading
Interface: NodeConfig, NodeRegistry, parse_registry(), load_registry()
Hidden: File format and validation details
"""

from .models import NodeConfig, NodeName, NodeRegistry, load_registry, parse_registry

__all__ = ["NodeConfig", "NodeName", "NodeRegistry", "load_registry", "parse_registry"]
