"""
maskfile — parser maskfile: skaner bloków, ekstraktor metadanych, budowa drzewa.

Interfejs publiczny:
    scan_blocks       — tekst → bloki (Heading, CodeFence, Text)
    extract_metadata  — bloki → bloki z TaskHeading + znaleziska
    build_tree        — bloki → BuildResult(root, findings)
    ScanError, BuildError, MaskfileError — błędy strukturalne

Typowe użycie:
    from maskfile import scan_blocks, extract_metadata, build_tree

    extraction = extract_metadata(scan_blocks(text))
    result     = build_tree(extraction.blocks)
    for task, ancestors in result.root.walk():
        print(task.full_name(ancestors))
"""

from .errors import BuildError, MaskfileError, ScanError
from .scanner import scan_blocks
from .metadata import AnnotatedBlock, Extraction, TaskHeading, extract_metadata
from .builder import BuildResult, build_tree, new_root

__all__ = [
    "BuildError",
    "MaskfileError",
    "ScanError",
    "scan_blocks",
    "AnnotatedBlock",
    "Extraction",
    "TaskHeading",
    "extract_metadata",
    "BuildResult",
    "build_tree",
    "new_root",
]
