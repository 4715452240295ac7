"""
File system helpers used by the logging setup.
"""
from os import path, remove, scandir
from shutil import rmtree


def clear_latest_items(dir_path: str, n_to_keep: int) -> int:
    """
    Remove the oldest entries of ``dir_path`` so that at most ``n_to_keep``
    remain. Entries are ranked by modification time.

    Args:
        dir_path (str): Directory whose entries are pruned.
        n_to_keep (int): Number of most recent entries to keep.

    Returns:
        int: Number of entries removed.

    Raises:
        FileNotFoundError: If ``dir_path`` does not exist.
    """
    if not path.exists(dir_path):
        raise FileNotFoundError(f"Path not found: {dir_path}")

    entries = sorted(scandir(dir_path), key=lambda entry: entry.stat().st_mtime)
    surplus = len(entries) - max(n_to_keep, 0)
    removed = 0

    for entry in entries[:max(surplus, 0)]:
        try:
            if entry.is_dir(follow_symlinks=False):
                rmtree(entry.path)
            else:
                remove(entry.path)
            removed += 1
        except OSError as e:
            # Another process may hold the folder; keep pruning the rest
            print(f"Error deleting item {entry.path}: {e}")

    return removed
