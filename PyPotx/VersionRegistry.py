from collections.abc import ItemsView

class VersionRegistry:
    """
    Version metadata reported by the extractor for each source file.
    A later report for the same file replaces the earlier one.
    """
    def __init__(self):
        self._versions : dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._versions)

    def __contains__(self, path : str) -> bool:
        return path in self._versions

    def RecordVersion(self, path : str, version : str|None):
        if version:
            self._versions[path] = version

    def Get(self, path : str, default : str|None = None) -> str|None:
        return self._versions.get(path, default)

    def items(self) -> ItemsView[str, str]:
        return self._versions.items()
