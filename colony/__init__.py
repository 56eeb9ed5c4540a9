"""
Colony - NixOS Deployment Core

Runs build/evaluation commands on behalf of the deployment tool and decides
which nodes an invocation applies to.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- progress: Live output sinks for command progress
- executor: Non-interactive command execution
- nodes: Node configuration and registry loading
- selector: Node selection by name and tag globs
- hive: Hive/flake configuration lookup
"""

__version__ = "0.1.0"
