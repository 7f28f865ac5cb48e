"""Key-path index construction.

Builds a nested dict whose leaves hold full dotted keys, so callers can
reference keys structurally (``index["common"]["save"] == "common.save"``)
without dynamic attribute tricks.
"""

from typing import Iterable, Iterator, List, Tuple

from localekit.i18n.models import Catalog, KeyPathIndex
from localekit.logging import get_module_logger

logger = get_module_logger()


class KeyPathIndexer:
    """Builds KeyPathIndex trees from flat catalogs."""

    @staticmethod
    def build_index(catalog: Catalog) -> KeyPathIndex:
        """Build the nested key index for a catalog.

        Collisions (a key that is both a leaf and a parent, e.g. "a.b" and
        "a.b.c") resolve to the entry processed last and are logged.

        Args:
            catalog: Flat catalog; only its keys are used.

        Returns:
            Nested dict with full dotted keys at the leaves.
        """
        index: KeyPathIndex = {}

        for key in catalog:
            parts = key.split(".")
            current = index

            for depth, part in enumerate(parts):
                if depth == len(parts) - 1:
                    if isinstance(current.get(part), dict):
                        logger.warning(
                            "key_path_collision",
                            key=key,
                            replaced="subtree",
                        )
                    current[part] = key
                else:
                    node = current.get(part)
                    if not isinstance(node, dict):
                        if node is not None:
                            logger.warning(
                                "key_path_collision",
                                key=key,
                                replaced=node,
                            )
                        node = {}
                        current[part] = node
                    current = node

        return index


def iter_leaves(index: KeyPathIndex, path: Tuple[str, ...] = ()) -> Iterator[Tuple[Tuple[str, ...], str]]:
    """Yield (path, full_key) pairs for every leaf of an index."""
    for part, node in index.items():
        if isinstance(node, dict):
            yield from iter_leaves(node, path + (part,))
        else:
            yield path + (part,), node


def find_key_conflicts(keys: Iterable[str]) -> List[str]:
    """List keys that are also a parent of another key, sorted."""
    key_set = set(keys)
    conflicts = set()
    for key in key_set:
        parts = key.split(".")
        for i in range(1, len(parts)):
            parent = ".".join(parts[:i])
            if parent in key_set:
                conflicts.add(parent)
    return sorted(conflicts)
