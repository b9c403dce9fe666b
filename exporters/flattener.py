"""Assembly of the flat file, compiler sources and manifest from a leveled registry."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from graph.leveler import manifest_order
from graph.model import DependencyRegistry, SourceNode

DEFAULT_NEWLINE = "\r\n"


@dataclass
class FlattenResult:
    """Everything produced for one root file."""

    root_node: SourceNode
    manifest: List[Dict[str, Any]] = field(default_factory=list)
    flat_text: str = ""
    compiler_input: Dict[str, Dict[str, str]] = field(default_factory=dict)


def flatten(
    root_node: SourceNode,
    registry: DependencyRegistry,
    newline: str = DEFAULT_NEWLINE,
    base: Optional[Path] = None,
) -> FlattenResult:
    """
    Build the three artifacts for a root whose registry is already leveled.

    Args:
        root_node: The root file's node.
        registry: Registry in emission (dependency-first) order.
        newline: Line separator used in generated text.
        base: Directory that flat-file labels are made relative to.

    Returns:
        FlattenResult with manifest, flat text and compiler sources.
    """
    return FlattenResult(
        root_node=root_node,
        manifest=make_manifest(registry),
        flat_text=make_flat_text(root_node, registry, newline, base),
        compiler_input=make_compiler_sources(registry, newline),
    )


def make_manifest(registry: DependencyRegistry) -> List[Dict[str, Any]]:
    """List ``{path, level}`` pairs sorted ascending by level."""
    return [
        {"path": node.path.as_posix(), "level": node.level}
        for node in manifest_order(registry)
    ]


def make_flat_text(
    root_node: SourceNode,
    registry: DependencyRegistry,
    newline: str = DEFAULT_NEWLINE,
    base: Optional[Path] = None,
) -> str:
    """
    Concatenate the root header, every dependency body and the root body.

    Dependencies appear once each, in registry (emission) order, each
    preceded by a ``//File: [...]`` label.
    """
    blocks = [newline.join(root_node.header), ""]
    for node in registry:
        if node.path == root_node.path:
            continue
        blocks.append(f"//File: [{_get_path_str(node.path, base)}]")
        blocks.append("")
        blocks.append(newline.join(node.body))
        blocks.append("")
    blocks.append(newline.join(root_node.body))
    return newline.join(blocks)


def make_short_imports(node: SourceNode, newline: str = DEFAULT_NEWLINE) -> str:
    """Rewrite a node's imports as bare same-directory import statements."""
    return newline.join(f'import "{target.name}";' for target in node.import_requires)


def make_source_content(node: SourceNode, newline: str = DEFAULT_NEWLINE) -> str:
    sections = [
        newline.join(node.header),
        make_short_imports(node, newline),
        newline.join(node.body),
    ]
    return (newline * 2).join(sections)


def make_compiler_sources(
    registry: DependencyRegistry,
    newline: str = DEFAULT_NEWLINE,
) -> Dict[str, Dict[str, str]]:
    """
    Map each node's canonical path to ``{"content": ...}``.

    Keys are absolute canonical paths, while the rewritten imports inside
    each content are bare file names (``import "Base.sol";``). A compiler
    fed this input needs a remapping or import callback from bare names to
    keys. Two files with the same name in different directories map to the
    same bare import and cannot be told apart that way.
    """
    return {
        node.path.as_posix(): {"content": make_source_content(node, newline)}
        for node in registry
    }


def _get_path_str(path: Path, base: Optional[Path]) -> str:
    """Get the display string of a path, relative to base when possible."""
    if base is not None:
        try:
            return path.relative_to(base.resolve()).as_posix()
        except ValueError:
            pass
    return path.as_posix()
