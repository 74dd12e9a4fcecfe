# =============================================================================
# Sorting Helpers
# =============================================================================
# Multi-key sorting of object lists by (possibly nested) attribute paths.
# =============================================================================

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, List, Mapping, Sequence, TypeVar, Union
import pyuca

T = TypeVar('T')


@dataclass
class SortField:
    """A single sort key."""
    attribute_id: str
    descending: bool = False
    case_insensitive: bool = False
    auto_sequence: bool = False
    
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SortField":
        """Create from the platform's camelCase shape."""
        return cls(
            attribute_id=data.get("attributeId", data.get("attribute_id")),
            descending=bool(data.get("descending", False)),
            case_insensitive=bool(data.get("caseInsensitive", data.get("case_insensitive", False))),
            auto_sequence=bool(data.get("autoSequence", data.get("auto_sequence", False))),
        )


SortSpec = Union[SortField, Mapping[str, Any]]


def _is_falsy(value: Any) -> bool:
    """Falsy as the platform's JSON values go: None, False, "", 0 and NaN."""
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)):
        return value == 0 or value != value
    return False


def _get_field(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(name)
    if isinstance(value, (list, tuple)):
        if name.isdigit() and int(name) < len(value):
            return value[int(name)]
        return None
    if isinstance(value, (str, bytes, int, float)):
        return None
    return getattr(value, name, None)


def get_value_from_object(obj: Any, attribute: str) -> Any:
    """
    Extract a value from an object using a dot-notation path.
    
    Path components may name relationships. A component of the form
    "[datatype]:[key]" (e.g. "accountMember:ownerAccountMemberKey") selects
    one of several relationships to the same type; the related object is
    stored in a field named after the key without "Key"
    ("ownerAccountMember"). With a single relationship to a type the plain
    name works ("accountMember").
    
    Resolution stops at the first falsy value (None, False, "", 0), which is
    returned as is. Empty dicts and lists are not falsy here.
    
    Args:
        obj: The object to extract the value from
        attribute: The attribute path (e.g. "user.address.city")
        
    Returns:
        The extracted value, or None if a field is missing
    """
    value = obj
    for component in attribute.split("."):
        if _is_falsy(value):
            break
        
        parts = component.split(":")
        if len(parts) > 1:
            value = _get_field(value, parts[1].replace("Key", "", 1))
        else:
            value = _get_field(value, component)
    
    return value


# =============================================================================
# COMPARISON
# =============================================================================
_collator = None


def _get_collator():
    """Lazy collator initialization; loading the collation table is slow."""
    global _collator
    if _collator is None:
        _collator = pyuca.Collator()
    return _collator


def _collate(a: str, b: str) -> int:
    collator = _get_collator()
    key_a = collator.sort_key(a)
    key_b = collator.sort_key(b)
    return (key_a > key_b) - (key_a < key_b)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float))


def compare_values(value_a: Any, value_b: Any, descending: bool, case_insensitive: bool) -> int:
    """
    Compare two values for sorting.
    
    With case_insensitive and a string first value, strings are compared
    lowercased using Unicode collation and empty values always sort last,
    even when descending. Otherwise the values are compared with < and >,
    with None counting as 0 against numbers; values that cannot be ordered
    compare equal.
    
    Returns:
        -1, 0 or 1
    """
    if case_insensitive and isinstance(value_a, str):
        a_present = not _is_falsy(value_a)
        b_present = not _is_falsy(value_b)
        if a_present and b_present:
            comp = _collate(value_a.lower(), str(value_b).lower())
            return -comp if descending else comp
        if a_present:
            return -1
        if b_present:
            return 1
        return 0
    
    # null orders as zero next to numbers
    if value_a is None and _is_number(value_b):
        value_a = 0
    elif value_b is None and _is_number(value_a):
        value_b = 0
    
    try:
        if value_a < value_b:
            return 1 if descending else -1
        if value_a > value_b:
            return -1 if descending else 1
    except TypeError:
        pass
    return 0


def sort_object_array(array: List[T], sort: Sequence[SortSpec]) -> List[T]:
    """
    Sort a list in place by the given sort fields.
    
    Nested attributes are supported as dot-delimited paths
    (e.g. "attribute.nestedAttribute"). Later fields break ties left by
    earlier ones.
    
    Args:
        array: The list to sort
        sort: SortField instances or {"attributeId", "descending", "caseInsensitive"} dicts
        
    Returns:
        The same list, sorted
    """
    fields = [s if isinstance(s, SortField) else SortField.from_dict(s) for s in sort]
    
    def _compare(a: T, b: T) -> int:
        comparison = 0
        for s in fields:
            value_a = get_value_from_object(a, s.attribute_id)
            value_b = get_value_from_object(b, s.attribute_id)
            
            comparison = compare_values(value_a, value_b, s.descending, s.case_insensitive)
            if comparison != 0:
                break
        return comparison
    
    array.sort(key=cmp_to_key(_compare))
    return array
