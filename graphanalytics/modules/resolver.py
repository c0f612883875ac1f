# graphanalytics/modules/resolver.py
"""
Dependency identity.

Run, Build and Meta nodes produced by the same source package are collapsed
into one reportable unit named after the SRPM file.
"""

import posixpath

from graphanalytics.modules.graph import NO_SRPM_PATH, PkgNode


def srpm_name(node: PkgNode) -> str:
    """Base filename of the node's SRPM path."""
    return posixpath.basename(node.srpm_path or "")


def dependency_name(node: PkgNode) -> str:
    """
    Name shared by every node built from the same package.
    Prefers the SRPM file name, falls back to the package name.
    """
    name = srpm_name(node)
    if not name or name == NO_SRPM_PATH:
        name = node.versioned_pkg.name
    return name
