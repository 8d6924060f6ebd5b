from typing import Iterable, List

from clonesweep.core.models import DuplicateGroup


class DuplicateService:
    @staticmethod
    def remove_files_from_groups(groups: List[DuplicateGroup], file_paths: Iterable[str]) -> List[DuplicateGroup]:
        """
        Removes files with the specified paths from all duplicate groups.

        Groups that contain fewer than 2 files after removal are discarded.
        Typically called with DeleteOutcome.deleted after a deletion request.

        Args:
            groups (list[DuplicateGroup]): List of duplicate groups to update.
            file_paths (Iterable[str]): Paths to remove.

        Returns:
            list[DuplicateGroup]: Updated list of duplicate groups.
        """
        removed = set(file_paths)
        updated_groups = []
        for group in groups:
            filtered_files = [f for f in group.files if f.path not in removed]
            if len(filtered_files) >= 2:
                updated_groups.append(DuplicateGroup(digest=group.digest, size=group.size, files=filtered_files))
        return updated_groups

    @staticmethod
    def select_all_but_largest(groups: List[DuplicateGroup]) -> List[str]:
        """
        Selects every file except the largest one of each group (the first
        one wins on ties), so that deleting the selection keeps exactly one
        copy per group.
        """
        selected = []
        for group in groups:
            if len(group.files) < 2:
                continue
            keep = group.largest_file()
            selected.extend(f.path for f in group.files if f is not keep)
        return selected

    @staticmethod
    def select_all(groups: List[DuplicateGroup]) -> List[str]:
        """Every path of every group, without repeats."""
        return list(dict.fromkeys(f.path for group in groups for f in group.files))

    @staticmethod
    def total_reclaimable_bytes(groups: List[DuplicateGroup], file_paths: Iterable[str]) -> int:
        """Calculate total space that would be freed by deleting files."""
        selected = set(file_paths)
        seen = set()
        total_bytes = 0
        for group in groups:
            for file in group.files:
                if file.path in selected and file.path not in seen:
                    seen.add(file.path)
                    total_bytes += file.size
        return total_bytes
