from typing import Dict, Sequence

from .errors import OutOfRangeTagIndex
from .values import Value


def resolve_tags(tags: Sequence[int], keys: Sequence[str], values: Sequence[Value]) -> Dict[str, Value]:
    """
    Turn a feature's flat tag list into its attribute mapping.

    Tags are consecutive (key index, value index) pairs into the layer
    dictionaries. A key seen twice keeps the value from its last pair.
    """
    if len(tags) % 2:
        raise OutOfRangeTagIndex(
            f"Tag list has odd length {len(tags)}; key index {tags[-1]} has no value index"
        )

    attrs: Dict[str, Value] = {}
    for i in range(0, len(tags), 2):
        k, v = tags[i], tags[i + 1]
        if k >= len(keys):
            raise OutOfRangeTagIndex(f"Key index {k} out of range for {len(keys)} keys")
        if v >= len(values):
            raise OutOfRangeTagIndex(f"Value index {v} out of range for {len(values)} values")
        attrs[keys[k]] = values[v]
    return attrs
