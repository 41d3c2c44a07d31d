import threading

from PyPotx.ExtractedString import ExtractedString, Occurrence, StringCandidate, StringPartition

CatalogKey = tuple[str, str|None, StringPartition]

class StringCatalog:
    """
    Accumulates every translatable string found during a run.

    Identical text with the same context and partition is stored once,
    with a list of every (file, line) where it occurs.
    """
    def __init__(self):
        self.lock = threading.Lock()
        self._strings : dict[CatalogKey, ExtractedString] = {}

    def __len__(self) -> int:
        return len(self._strings)

    def Record(self, text : str, path : str, line : int, partition : StringPartition = StringPartition.Runtime, context : str|None = None) -> ExtractedString:
        """
        Add an occurrence of a string, creating the entry if this is the first time it has been seen
        """
        key : CatalogKey = (text, context or None, partition)
        with self.lock:
            extracted = self._strings.get(key)
            if extracted is None:
                extracted = ExtractedString(text=text, context=context or None, partition=partition)
                self._strings[key] = extracted

            extracted.occurrences.append(Occurrence(path, line))
            return extracted

    def RecordCandidates(self, path : str, candidates : list[StringCandidate]) -> int:
        """
        Record every string an extractor found in a file. Returns the number of occurrences recorded.
        """
        for candidate in candidates:
            self.Record(candidate.text, path, candidate.line, candidate.partition, candidate.context)
        return len(candidates)

    def RemoveFile(self, path : str) -> int:
        """
        Remove every occurrence from a file, dropping strings that no longer occur anywhere
        """
        removed = 0
        with self.lock:
            for key in list(self._strings.keys()):
                extracted = self._strings[key]
                remaining = [ occurrence for occurrence in extracted.occurrences if occurrence.path != path ]
                removed += len(extracted.occurrences) - len(remaining)
                if remaining:
                    extracted.occurrences = remaining
                else:
                    del self._strings[key]
        return removed

    def Get(self, text : str, context : str|None = None, partition : StringPartition = StringPartition.Runtime) -> ExtractedString|None:
        with self.lock:
            return self._strings.get((text, context or None, partition))

    def All(self, partition : StringPartition) -> list[ExtractedString]:
        """
        All strings in a partition, in the order they were first seen
        """
        with self.lock:
            return [ extracted for extracted in self._strings.values() if extracted.partition == partition ]

    def Count(self, partition : StringPartition) -> int:
        with self.lock:
            return sum(1 for extracted in self._strings.values() if extracted.partition == partition)
