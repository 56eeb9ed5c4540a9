"""
Node data models.

The configuration-evaluation layer owns these; the core only reads them.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Set, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger("colony.nodes")

NodeName = str


class NodeConfig(BaseModel):
    """Per-node deployment attributes."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    tags: Set[str] = Field(default_factory=set, description="Descriptive tags used for selection")
    target_host: Optional[str] = Field(None, description="Host to deploy to")
    target_user: Optional[str] = Field(None, description="SSH user on the target host")
    target_port: Optional[int] = Field(None, description="SSH port on the target host", ge=1, le=65535)
    allow_local_deployment: bool = Field(False, description="Allow deploying to the local machine")
    build_on_target: bool = Field(False, description="Build the system closure on the target itself")


NodeRegistry = Dict[NodeName, NodeConfig]


def parse_registry(data: Any) -> NodeRegistry:
    """
    Validate a raw mapping of node names to attributes.

    Args:
        data: Mapping of name -> attribute mapping (None means no attributes)

    Returns:
        NodeRegistry

    Raises:
        ValueError: If the document is not a mapping or a node is invalid
    """
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Node registry must be a mapping, got {type(data).__name__}")

    registry: NodeRegistry = {}
    for name, attrs in data.items():
        try:
            registry[str(name)] = NodeConfig.model_validate(attrs or {})
        except ValidationError as e:
            raise ValueError(f"Invalid configuration for node {name!r}: {e}") from e

    return registry


def load_registry(path: Union[str, Path]) -> NodeRegistry:
    """Load a node registry from a YAML or JSON file."""
    path = Path(path)
    with open(path) as f:
        data = yaml.safe_load(f)

    registry = parse_registry(data)
    logger.debug(f"Loaded {len(registry)} nodes from {path}")
    return registry
