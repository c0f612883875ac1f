# graphanalytics/modules/aggregate.py

from typing import Dict, Iterator, List, Tuple


class Aggregator:
    """
    Maps a key to the ordered list of distinct names attached to it.
    A name never appears twice under the same key.
    """

    def __init__(self):
        self._data: Dict[str, List[str]] = {}

    def insert_if_missing(self, key: str, value: str):
        values = self._data.setdefault(key, [])
        if value not in values:
            values.append(value)

    def get(self, key: str) -> List[str]:
        return list(self._data.get(key, []))

    def keys(self) -> List[str]:
        return list(self._data)

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        for key, values in self._data.items():
            yield key, list(values)

    def to_dict(self) -> Dict[str, List[str]]:
        return {key: list(values) for key, values in self._data.items()}

    def __len__(self):
        return len(self._data)

    def __contains__(self, key):
        return key in self._data
