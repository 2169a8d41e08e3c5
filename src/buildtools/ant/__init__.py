"""Ant build-tool package.

Resolves pre-built jars found in an Ant-style layout to Maven identities:
- scan.py: recursive discovery of *.jar files under a project root
- archive.py: zip container handle and MANIFEST.MF parsing
- pom.py: embedded pom.xml selection and decoding
- strategies.py: ordered identity strategies (pom, manifest, file name)
- resolver.py: per-archive resolution over the strategy chain
- graph.py: graph assembly and the build_graph entry point
"""

from .scan import ArchiveScanError, scan_archives
from .archive import Archive, ArchiveError, open_archive, parse_manifest
from .pom import PomCoordinates, PomDecodeError, decode_pom, select_pom_entry
from .strategies import (
    STRATEGIES,
    ResolutionError,
    resolve_from_filename,
    resolve_from_manifest,
    resolve_from_pom,
)
from .resolver import IdentityResolver
from .graph import GraphBuilder, build_graph

__all__ = [
    # Scanning
    "ArchiveScanError",
    "scan_archives",
    # Containers
    "Archive",
    "ArchiveError",
    "open_archive",
    "parse_manifest",
    # Poms
    "PomCoordinates",
    "PomDecodeError",
    "decode_pom",
    "select_pom_entry",
    # Strategies
    "STRATEGIES",
    "ResolutionError",
    "resolve_from_filename",
    "resolve_from_manifest",
    "resolve_from_pom",
    # Resolution and graph
    "IdentityResolver",
    "GraphBuilder",
    "build_graph",
]
